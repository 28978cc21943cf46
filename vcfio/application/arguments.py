import copy
from dataclasses import dataclass


@dataclass
class Argument(object):
    cli: str
    kwargs: dict

    def add_to(self, parser):
        raise NotImplementedError


@dataclass
class Parameter(Argument):
    def add_to(self, parser):
        """Add parameter to a parser object."""
        kwargs = copy.deepcopy(self.kwargs)
        parser.add_argument(
            self.cli,
            **kwargs,
        )
        return parser


@dataclass
class BooleanFlag(Argument):
    def add_to(self, parser):
        """Add boolean flag to a parser object."""
        dest = self.kwargs["dest"]
        action = self.kwargs["action"]
        if action == "store_true":
            default = False
        elif action == "store_false":
            default = True
        else:
            raise ValueError('Action must be "store_true" or "store_false".')
        parser.set_defaults(**{dest: default})
        parser.add_argument(
            self.cli,
            **self.kwargs,
        )
        return parser


input_vcf = Parameter(
    "input",
    dict(
        type=str,
        nargs=1,
        help=(
            "Input VCF file. Files ending in '.gz' or '.bgz' are read as "
            "BGZF compressed."
        ),
    ),
)

output_vcf = Parameter(
    "--output",
    dict(
        type=str,
        nargs=1,
        required=True,
        help=(
            "Output VCF file. Files ending in '.gz' or '.bgz' are written as "
            "BGZF compressed."
        ),
    ),
)

skip_malformed = BooleanFlag(
    "--skip-malformed",
    dict(
        dest="skip_malformed",
        action="store_true",
        help=(
            "Skip records which can not be parsed with a warning rather "
            "than stopping at the first malformed record."
        ),
    ),
)


DEFAULT_PARSER_ARGUMENTS = [
    input_vcf,
    output_vcf,
    skip_malformed,
]


def parse_arguments(parser, arguments):
    for arg in arguments:
        arg.add_to(parser)
    return parser
