import pytest

from vcfio.header import Header
from vcfio.records import (
    NOT_FOUND,
    Record,
    format_info_field,
    format_record,
    format_sample_field,
)


def empty_record(samples=("foo",)):
    record = Record(Header(samples=samples))
    record.chromosome = b"19"
    record.position = 11472995
    record.id = [b"hoge"]
    record.reference = b"A"
    record.alternative = [b"C", b"AC"]
    return record


def test_record_from_line():
    header = Header(samples=["S1"])
    record = Record.from_line(header, "1\t100\t.\tA\tC\t.\t.\tDP=3\tGT\t0/1\n")
    assert record.header is header
    assert record.get_info("DP") == (b"3",)
    assert record.get_genotype("S1", "GT") == (b"0/1",)


def test_format_record__minimal():
    record = empty_record(samples=())
    assert format_record(record) == b"19\t11472995\thoge\tA\tC,AC\t.\t.\t.\n"


def test_format_record__info_and_genotype():
    record = empty_record()
    record.info = [
        (b"HOGE", []),
        (b"FOO", [b"TEST"]),
        (b"BAR", [b"TEST1", b"TEST2"]),
    ]
    record.format = [b"GT", b"AD"]
    record.genotype = [[[b"0/0"], [b"10", b"20"]]]
    record.recreate_info_and_genotype_index()
    expect = b"19\t11472995\thoge\tA\tC,AC\t.\t.\tHOGE;FOO=TEST;BAR=TEST1,TEST2\tGT:AD\t0/0:10,20\n"
    assert format_record(record) == expect
    assert bytes(record) == expect
    assert str(record) == expect.decode().rstrip("\n")


def test_format_record__missing_sample():
    record = empty_record(samples=("foo", "bar"))
    record.id = [b"hoge", b"foo"]
    record.format = [b"GT", b"AD"]
    record.genotype = [[[b"0/0"], [b"10", b"20"]], [[b"0/1"], []]]
    expect = b"19\t11472995\thoge,foo\tA\tC,AC\t.\t.\t.\tGT:AD\t0/0:10,20\t0/1:.\n"
    assert format_record(record) == expect
    record.genotype[1] = []
    expect = b"19\t11472995\thoge,foo\tA\tC,AC\t.\t.\t.\tGT:AD\t0/0:10,20\t.\n"
    assert format_record(record) == expect


@pytest.mark.parametrize(
    "quality, expect",
    [
        (None, b"."),
        (20.0, b"20.0"),
        (25743.5, b"25743.5"),
        (0.1, b"0.1"),
        (8397280.0, b"8397280.0"),
        (1e-9, b"0.0"),
    ],
)
def test_format_record__quality(quality, expect):
    record = empty_record(samples=())
    record.quality = quality
    assert format_record(record).split(b"\t")[5] == expect


def test_format_info_field__values_as_held():
    info = [(b"NOTE", [b"a%3Bb%2Cc", b"x=y"]), (b"GENEINFO", [b"BRCA1:672"]), (b"DB", [])]
    assert format_info_field(info) == b"NOTE=a%3Bb%2Cc,x=y;GENEINFO=BRCA1:672;DB"
    assert format_info_field([]) == b"."


def test_format_sample_field():
    actual = format_sample_field([b"GT", b"FT"], [[[b"0/1"], [b"a%3Ab"]], []])
    assert actual == b"GT:FT\t0/1:a%3Ab\t."


def test_record_equality_and_copy():
    record = Record.from_line(
        Header(samples=["S1"]), b"1\t100\t.\tA\tC\t3.5\tPASS\tDP=3\tGT:AD\t0/1:1,2"
    )
    other = record.copy()
    assert other == record
    assert other is not record
    other.genotype[0][1][0] = b"9"
    assert other != record
    assert record.get_genotype("S1", "AD") == (b"1", b"2")
    assert other.get_genotype("S1", "AD") == (b"9", b"2")
    assert record != "not a record"


def test_get_info__duplicate_last_wins():
    record = Record.from_line(Header(), b"1\t100\t.\tA\tC\t.\t.\tDP=1;DP=2")
    assert record.get_info("DP") == (b"2",)
    assert record.info == [(b"DP", [b"1"]), (b"DP", [b"2"])]


def test_get_info__absent():
    record = Record.from_line(Header(), b"1\t100\t.\tA\tC\t.\t.\tDB")
    assert record.get_info("DB") == ()
    assert record.get_info("DP") is None
    assert record.info_mut("DP") is None


def test_info_mut():
    record = Record.from_line(Header(), b"1\t100\t.\tA\tC\t.\t.\tDP=1;AF=0.5")
    record.info_mut("AF")[:] = [b"0.25", b"0.75"]
    assert record.get_info(b"AF") == (b"0.25", b"0.75")
    assert format_record(record) == b"1\t100\t.\tA\tC\t.\t.\tDP=1;AF=0.25,0.75\n"


def test_insert_info():
    record = Record.from_line(Header(), b"1\t100\t.\tA\tC\t.\t.\tDP=1")
    previous = record.insert_info("DP", ["5"])
    assert previous == [b"1"]
    assert record.get_info("DP") == (b"5",)
    assert record.insert_info("DB", []) is None
    assert record.insert_info(b"AF", [b"0.5"]) is None
    assert record.get_info("DB") == ()
    assert record.get_info("AF") == (b"0.5",)
    assert format_record(record) == b"1\t100\t.\tA\tC\t.\t.\tDP=5;DB;AF=0.5\n"


def test_insert_genotype__new_key_pads_row():
    header = Header(samples=["S1", "S2"])
    record = Record.from_line(header, b"1\t100\t.\tA\tC\t.\t.\t.\tGT\t0/1\t0/0")
    assert record.insert_genotype("S2", "DP", ["7"]) is None
    assert record.format == [b"GT", b"DP"]
    assert record.genotype == [[[b"0/1"]], [[b"0/0"], [b"7"]]]
    assert record.get_genotype("S2", "DP") == (b"7",)
    assert record.get_genotype("S1", "DP") is None
    assert format_record(record) == b"1\t100\t.\tA\tC\t.\t.\t.\tGT:DP\t0/1\t0/0:7\n"


def test_insert_genotype__pads_missing_fields():
    header = Header(samples=["S1", "S2"])
    record = Record.from_line(header, b"1\t100\t.\tA\tC\t.\t.\t.\tGT:AD:DP\t0/1:1,2:3\t.")
    record.insert_genotype("S2", "DP", ["4"])
    assert record.genotype[1] == [[], [], [b"4"]]
    assert format_record(record).endswith(b"\t0/1:1,2:3\t.:.:4\n")


def test_insert_genotype__missing_rows():
    header = Header(samples=["S1", "S2"])
    record = Record.from_line(header, b"1\t100\t.\tA\tC")
    record.insert_genotype("S2", "GT", ["0/1"])
    assert record.format == [b"GT"]
    assert record.genotype == [[], [[b"0/1"]]]
    assert format_record(record) == b"1\t100\t.\tA\tC\t.\t.\t.\tGT\t.\t0/1\n"


def test_insert_genotype__replace():
    header = Header(samples=["S1"])
    record = Record.from_line(header, b"1\t100\t.\tA\tC\t.\t.\t.\tGT:AD\t0/1:1,2")
    previous = record.insert_genotype("S1", "AD", ["3", "4"])
    assert previous == [b"1", b"2"]
    assert record.get_genotype("S1", "AD") == (b"3", b"4")


def test_insert_genotype__unknown_sample():
    record = Record.from_line(Header(samples=["S1"]), b"1\t100\t.\tA\tC")
    with pytest.raises(KeyError):
        record.insert_genotype("S9", "GT", ["0/1"])


def test_genotype_mut():
    header = Header(samples=["S1"])
    record = Record.from_line(header, b"1\t100\t.\tA\tC\t.\t.\t.\tGT:AD\t0/1:1,2")
    record.genotype_mut("S1", "AD").append(b"3")
    assert record.get_genotype("S1", "AD") == (b"1", b"2", b"3")
    assert record.genotype_mut("S1", "DP") is None
    assert record.genotype_mut("S9", "AD") is None


def test_recreate_info_and_genotype_index():
    header = Header(samples=["S1"])
    record = Record.from_line(header, b"1\t100\t.\tA\tC\t.\t.\tDP=1\tGT:AD\t0/1:1,2")
    record.info.insert(0, (b"NS", [b"2"]))
    record.format.reverse()
    record.genotype[0].reverse()
    # lookups are stale until the index is rebuilt
    assert record.get_info("NS") is None
    record.recreate_info_and_genotype_index()
    assert record.get_info("NS") == (b"2",)
    assert record.get_info("DP") == (b"1",)
    assert record.get_genotype("S1", "GT") == (b"0/1",)
    assert record.get_genotype("S1", "AD") == (b"1", b"2")


def test_recreate_info_and_genotype_index__stale_keys():
    record = Record.from_line(Header(), b"1\t100\t.\tA\tC\t.\t.\tDP=1")
    record.info.clear()
    record.recreate_info_and_genotype_index()
    assert record._info_index == {b"DP": NOT_FOUND}
    assert record.get_info("DP") is None


def test_get_genotype__duplicate_last_wins():
    header = Header(samples=["S1"])
    record = Record.from_line(header, b"1\t100\t.\tA\tC\t.\t.\t.\tGT:DP:GT\t0/1:3:1/1")
    assert record.get_genotype("S1", "GT") == (b"1/1",)
    assert record.get_genotype("S1", "DP") == (b"3",)
    assert format_record(record).endswith(b"\tGT:DP:GT\t0/1:3:1/1\n")


def test_get_info__decodes_escapes():
    record = Record.from_line(
        Header(), b"1\t100\t.\tA\tC\t.\t.\tNOTE=a%3Bb%2Cc,d;GENEINFO=BRCA1:672"
    )
    assert record.get_info("NOTE") == (b"a;b,c", b"d")
    assert record.get_info("GENEINFO") == (b"BRCA1:672",)
    # the mutable list holds the escaped form
    assert record.info_mut("NOTE") == [b"a%3Bb%2Cc", b"d"]


def test_insert_info__encodes_reserved():
    record = Record.from_line(Header(), b"1\t100\t.\tA\tC")
    record.insert_info("NOTE", ["a;b", "100%"])
    assert record.info == [(b"NOTE", [b"a%3Bb", b"100%25"])]
    assert record.get_info("NOTE") == (b"a;b", b"100%")
    assert format_record(record) == b"1\t100\t.\tA\tC\t.\t.\tNOTE=a%3Bb,100%25\n"


def test_insert_genotype__encodes_reserved():
    header = Header(samples=["S1"])
    record = Record.from_line(header, b"1\t100\t.\tA\tC\t.\t.\t.\tGT\t0/1")
    record.insert_genotype("S1", "FT", ["a:b"])
    assert record.genotype_mut("S1", "FT") == [b"a%3Ab"]
    assert record.get_genotype("S1", "FT") == (b"a:b",)
    assert format_record(record) == b"1\t100\t.\tA\tC\t.\t.\t.\tGT:FT\t0/1:a%3Ab\n"
