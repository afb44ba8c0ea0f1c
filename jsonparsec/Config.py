from dataclasses import dataclass, replace

# Deepest array/object nesting accepted by default. Every nesting level costs
# a few dozen Python frames, so this stays well inside the default
# recursion limit.
MAX_NESTING_DEPTH = 25


@dataclass(frozen=True)
class ParserConfig:
    """
    Knobs for the top-level JSON parser.
    """
    max_depth: int = MAX_NESTING_DEPTH     # deepest allowed [ / { nesting
    require_end_of_input: bool = True      # reject text after the root value
    skip_outer_whitespace: bool = True     # allow whitespace around the root value

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")


# -----------------------------------------------------------
# Presets
# -----------------------------------------------------------

default_config = ParserConfig()

# Parses a value from the front of the text and ignores whatever follows,
# the way the bare grammar behaves.
prefix_config = replace(
    default_config,
    require_end_of_input=False,
    skip_outer_whitespace=False,
)
