import sys
import argparse

from vcfio.application import recompress

from vcfio import __version__


def main():
    parser = argparse.ArgumentParser("Parse and write VCF files")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"vcfio {__version__}",
    )

    subprograms = ["recompress"]

    parser.add_argument(
        "program", nargs=1, choices=subprograms, help="Specify sub-program"
    )
    if len(sys.argv) < 2:
        parser.print_help()

    else:
        args = parser.parse_args(sys.argv[1:2])
        prog = args.program[0]
        if prog == "recompress":
            recompress.main(sys.argv)
        else:
            assert False
