"""Tests for ColumnPipeline and parse_string_columns on pandas and polars frames."""
import logging

import pandas as pd
import polars as pl
import pytest

from catnorm.levels.values import ABSENT, REJECTED, Label
from catnorm.levels.builders import level_range
from catnorm.levels.errors import LevelConfigError, RejectionReport
from catnorm.levels.recoder import DROP
from catnorm.dataflow.pipeline import ColumnSpec, ColumnPipeline, parse_string_columns


def fetuses_pd():
    return pd.DataFrame({
        'hair_coronary_band': ['n', '', 'N', 'Y', 'Y'],
        'parity': [1, 3, 2, 12, None],
        'age_days': [40, 55, 120, 210, 90],
        'sex': ['Female', 'Male', 'Non Diff', 'Female', 'male'],
    })


HAIR = ColumnSpec(levels=['N', 'n', 'Y'], rules={DROP: [ABSENT], 'No': ['N', 'n'], 'Yes': 'Y'})
PARITY = ColumnSpec(prefix='Parity_', levels=level_range('Parity_', 1, 10), ordered=True)
SEX = ColumnSpec(levels=['Female', 'Male', 'Non Diff'])


class TestColumnPipelineConfig:
    def test_bad_levels_fail_at_construction(self):
        with pytest.raises(LevelConfigError):
            ColumnPipeline({'sex': ColumnSpec(levels=['Male', 'Male'])})

    def test_bad_rule_source_fails_at_construction(self):
        with pytest.raises(LevelConfigError) as exc_info:
            ColumnPipeline({'hair': ColumnSpec(levels=['N', 'Y'], rules={'No': ['N', 'n']})})
        assert exc_info.value.labels == ('n',)

    def test_inferred_levels_still_check_rule_structure(self):
        with pytest.raises(LevelConfigError):
            ColumnPipeline({'hair': ColumnSpec(rules=[('No', 'N'), ('Nope', 'N')])})

    def test_missing_column(self):
        pipeline = ColumnPipeline({'nope': SEX})
        with pytest.raises(KeyError):
            pipeline.process_df(fetuses_pd())

    def test_not_a_dataframe(self):
        pipeline = ColumnPipeline({'sex': SEX})
        with pytest.raises(TypeError):
            pipeline.process_df({'sex': ['Male']})


class TestColumnPipelinePandas:
    def test_process_df(self):
        df = fetuses_pd()
        pipeline = ColumnPipeline({'hair_coronary_band': HAIR, 'parity': PARITY, 'sex': SEX})
        df_out, rejections = pipeline.process_df(df)

        hair = df_out['hair_coronary_band']
        assert list(hair.cat.categories) == ['No', 'Yes']
        assert hair.tolist()[0] == 'No'
        assert pd.isna(hair.iloc[1])

        parity = df_out['parity']
        assert parity.cat.ordered
        assert list(parity.cat.categories) == level_range('Parity_', 1, 10)
        assert parity.iloc[0] == 'Parity_1'
        assert pd.isna(parity.iloc[3]) and pd.isna(parity.iloc[4])

        assert rejections == [
            RejectionReport(position=4, text='Parity_12', column='parity'),
            RejectionReport(position=5, text='male', column='sex'),
        ]

    def test_untouched_columns_and_input(self):
        df = fetuses_pd()
        before = df.copy()
        df_out, _ = ColumnPipeline({'sex': SEX}).process_df(df)
        pd.testing.assert_frame_equal(df, before)
        pd.testing.assert_series_equal(df_out['age_days'], df['age_days'])
        assert list(df_out.columns) == list(df.columns)

    def test_factors_keep_missing_kinds(self):
        pipeline = ColumnPipeline({'parity': PARITY, 'hair_coronary_band': HAIR})
        pipeline.process_df(fetuses_pd())
        parity = pipeline.factors['parity']
        assert parity[3] is REJECTED
        assert parity[4] is ABSENT
        # DROP turned the blank hair entry into a rejection
        assert pipeline.factors['hair_coronary_band'][1] is REJECTED

    def test_process_column(self):
        pipeline = ColumnPipeline({'sex': SEX})
        factor, rejections = pipeline.process_column('sex', ['Male', 'Femal'])
        assert factor.values == (Label('Male'), REJECTED)
        assert rejections[0].column == 'sex'

    def test_index_preserved(self):
        df = fetuses_pd().set_index(pd.Index([10, 11, 12, 13, 14]))
        df_out, _ = ColumnPipeline({'sex': SEX}).process_df(df)
        assert list(df_out.index) == [10, 11, 12, 13, 14]
        assert df_out.loc[12, 'sex'] == 'Non Diff'

    def test_exhaustive_spec(self):
        spec = ColumnSpec(levels=['N', 'Y'], rules={'No': 'N'}, exhaustive=True)
        df = pd.DataFrame({'eyelid': ['N', 'Y']})
        df_out, rejections = ColumnPipeline({'eyelid': spec}).process_df(df)
        assert list(df_out['eyelid'].cat.categories) == ['No']
        assert df_out['eyelid'].isna().tolist() == [False, True]
        assert rejections == []

    def test_logs_per_column(self, caplog):
        with caplog.at_level(logging.INFO, logger="catnorm.dataflow.pipeline"):
            ColumnPipeline({'sex': SEX}).process_df(fetuses_pd())
        messages = [r.getMessage() for r in caplog.records if r.name == "catnorm.dataflow.pipeline"]
        assert messages == ["column=sex levels=3 rejected=1"]


class TestColumnPipelinePolars:
    def test_process_df(self):
        df = pl.DataFrame({
            'hair_coronary_band': ['n', None, 'N', 'Y', 'Y'],
            'age_days': [40, 55, 120, 210, 90],
        })
        df_out, rejections = ColumnPipeline({'hair_coronary_band': HAIR}).process_df(df)
        hair = df_out['hair_coronary_band']
        assert isinstance(hair.dtype, pl.Enum)
        assert hair.dtype.categories.to_list() == ['No', 'Yes']
        assert hair.to_list() == ['No', None, 'No', 'Yes', 'Yes']
        assert df_out['age_days'].to_list() == [40, 55, 120, 210, 90]
        assert rejections == []

    def test_input_not_mutated(self):
        df = pl.DataFrame({'sex': ['Male', 'x']})
        ColumnPipeline({'sex': SEX}).process_df(df)
        assert df['sex'].dtype == pl.String


class TestParseStringColumns:
    def test_pandas(self):
        df_out = parse_string_columns(fetuses_pd())
        assert isinstance(df_out['sex'].dtype, pd.CategoricalDtype)
        assert list(df_out['sex'].cat.categories) == ['Female', 'Male', 'Non Diff', 'male']
        assert list(df_out['hair_coronary_band'].cat.categories) == ['n', 'N', 'Y']
        assert df_out['age_days'].dtype == fetuses_pd()['age_days'].dtype

    def test_polars(self):
        df = pl.DataFrame({'txt': ['b', 'a', 'b'], 'num': [1, 2, 3]})
        df_out = parse_string_columns(df)
        assert df_out['txt'].dtype.categories.to_list() == ['b', 'a']
        assert df_out['num'].dtype == pl.Int64

    def test_pandas_categorical_left_alone(self):
        df = pd.DataFrame({
            'cat': pd.Categorical(['b', 'a'], categories=['b', 'a', 'c']),
            'txt': ['y', 'x'],
        })
        df_out = parse_string_columns(df)
        assert list(df_out['cat'].cat.categories) == ['b', 'a', 'c']
        assert list(df_out['txt'].cat.categories) == ['y', 'x']

    def test_polars_enum_left_alone(self):
        df = pl.DataFrame({'enum': pl.Series(['b'], dtype=pl.Enum(['a', 'b']))})
        df_out = parse_string_columns(df)
        assert df_out['enum'].dtype.categories.to_list() == ['a', 'b']
