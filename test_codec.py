import unittest

from csv_viewer.codec import format_document, format_record, parse_record, split_records


class ParseRecordTests(unittest.TestCase):
    def test_simple_line(self):
        self.assertEqual(parse_record("Name,Age,City"), ["Name", "Age", "City"])

    def test_quoted_fields(self):
        self.assertEqual(parse_record('"John Doe","30","New York"'), ["John Doe", "30", "New York"])

    def test_commas_inside_quotes(self):
        self.assertEqual(parse_record('"Doe, John",30,"New York, NY"'), ["Doe, John", "30", "New York, NY"])

    def test_escaped_quotes(self):
        self.assertEqual(parse_record('"He said ""Hi""",x'), ['He said "Hi"', "x"])

    def test_empty_input_yields_one_empty_field(self):
        self.assertEqual(parse_record(""), [""])

    def test_only_separators(self):
        self.assertEqual(parse_record(",,"), ["", "", ""])

    def test_fields_are_not_trimmed(self):
        self.assertEqual(parse_record(" a , b "), [" a ", " b "])

    def test_newlines_inside_quotes(self):
        self.assertEqual(
            parse_record('"First\nSecond",Value,"Third\nFourth"'),
            ["First\nSecond", "Value", "Third\nFourth"],
        )

    def test_rfc4180_embedded_quote(self):
        self.assertEqual(parse_record('aaa,"b""bb",ccc'), ["aaa", 'b"bb', "ccc"])


class FormatRecordTests(unittest.TestCase):
    def test_plain_fields_pass_through(self):
        self.assertEqual(format_record(["Name", "", "City"]), "Name,,City")

    def test_commas_are_quoted(self):
        self.assertEqual(format_record(["Doe, John", "30"]), '"Doe, John",30')

    def test_quotes_are_doubled(self):
        self.assertEqual(format_record(['He said "Hello"', "Test"]), '"He said ""Hello""",Test')

    def test_newlines_are_quoted(self):
        self.assertEqual(format_record(["First\nSecond", "Value"]), '"First\nSecond",Value')

    def test_lone_blank_field_is_quoted(self):
        self.assertEqual(format_record([""]), '""')
        self.assertEqual(format_record(["  "]), '"  "')
        self.assertEqual(parse_record(format_record(["  "])), ["  "])

    def test_all_blank_fields_keep_separators(self):
        self.assertEqual(format_record(["", ""]), ",")

    def test_round_trip(self):
        for fields in (
            ["Doe, John", 'He said "Hello"', "New York, NY"],
            ["", "Value", ""],
            ["First\nSecond", "Value", "Third\r\nFourth"],
            [""],
        ):
            self.assertEqual(parse_record(format_record(fields)), fields)


class SplitRecordsTests(unittest.TestCase):
    def test_splits_on_any_line_ending(self):
        self.assertEqual(split_records("a,b\r\nc,d\re,f\n"), ["a,b", "c,d", "e,f"])

    def test_quoted_newline_stays_in_record(self):
        text = 'name,note\nAnn,"line one\nline two"\nBo,x\n'
        self.assertEqual(split_records(text), ["name,note", 'Ann,"line one\nline two"', "Bo,x"])

    def test_blank_lines_are_dropped(self):
        self.assertEqual(split_records("a\n\n   \nb\n\n"), ["a", "b"])

    def test_empty_text(self):
        self.assertEqual(split_records(""), [])

    def test_escaped_quotes_do_not_confuse_splitting(self):
        text = 'a,"x ""y"""\nb,c'
        self.assertEqual(split_records(text), ['a,"x ""y"""', "b,c"])


def test_format_document_terminates_every_record():
    text = format_document(["a", "b"], [["1", "x,y"], ["2", ""]])
    assert text == 'a,b\n1,"x,y"\n2,\n'


def test_single_column_blank_rows_survive_splitting():
    text = format_document(["note"], [["a"], [""], [" "], ["b"]])
    records = split_records(text)
    assert [parse_record(record) for record in records[1:]] == [["a"], [""], [" "], ["b"]]
