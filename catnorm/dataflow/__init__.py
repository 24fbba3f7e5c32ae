from .pipeline import ColumnSpec, ColumnPipeline, parse_string_columns
