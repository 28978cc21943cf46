import sys
import argparse
import warnings
from dataclasses import dataclass

import pysam

from vcfio import headermeta as HEADER
from vcfio.application import arguments
from vcfio.errors import RecordParseError
from vcfio.reader import Reader
from vcfio.writer import Writer

SKIPPED_RECORD = "Skipped malformed record at line: {line_number}"

COMPRESSED_SUFFIXES = (".gz", ".bgz")


def open_vcf(path, mode):
    """Open a VCF file as a binary stream.

    Paths ending in '.gz' or '.bgz' are opened as BGZF files.
    """
    if path.endswith(COMPRESSED_SUFFIXES):
        return pysam.BGZFile(path, mode)
    return open(path, mode)


@dataclass
class program(object):
    input: str
    output: str
    skip_malformed: bool = False
    cli_command: list = None

    @classmethod
    def cli(cls, command):
        """Program initialization from cli command

        e.g. `program.cli(sys.argv)`
        """
        parser = argparse.ArgumentParser("Parse a VCF file and write it back out")
        parser = arguments.parse_arguments(
            parser, arguments.DEFAULT_PARSER_ARGUMENTS
        )
        if len(command) < 3:
            parser.print_help()
            sys.exit(1)
        args = parser.parse_args(command[2:])
        return cls(
            input=args.input[0],
            output=args.output[0],
            skip_malformed=args.skip_malformed,
            cli_command=command,
        )

    def copy_records(self, reader, writer):
        """Copy all records from a reader to a writer reusing one record.

        Returns
        -------
        n_records : int
            Number of records written.
        n_skipped : int
            Number of malformed records skipped.
        """
        record = reader.new_record()
        n_records = 0
        n_skipped = 0
        while True:
            try:
                if not reader.next_record(record):
                    break
            except RecordParseError as e:
                if not self.skip_malformed:
                    raise
                warnings.warn(SKIPPED_RECORD.format(line_number=e.line_number))
                n_skipped += 1
                continue
            writer.write_record(record)
            n_records += 1
        return n_records, n_skipped

    def header(self, header):
        """Input header with the source and command line of this run appended."""
        meta_fields = [HEADER.source()]
        if self.cli_command is not None:
            meta_fields.append(HEADER.commandline(self.cli_command))
        return header.with_lines(*meta_fields)

    def run(self):
        with open_vcf(self.input, "rb") as src, open_vcf(self.output, "wb") as dst:
            reader = Reader(src)
            writer = Writer(dst, self.header(reader.header))
            return self.copy_records(reader, writer)


def main(command):
    program.cli(command).run()
