from .values import Label, ABSENT, REJECTED, CategoricalValue, is_missing
from .category_set import CategorySet
from .errors import LevelConfigError, RejectionReport
from .factor import Factor
from .conf import ParseConf, TrimmedParseConf, ReadrConf
from .parser import parse, parse_column
from .recoder import DROP, RecodeRule, RecodeRules, recode, collapse, relabel, drop_unused
from .builders import prefixed, level_range, zero_padded
from .binning import cut
from .summary import summarize
