"""Source readers: decode source text into the Value model."""

from docconvert.infrastructure.readers.csv_reader import CsvSourceReader, read_csv
from docconvert.infrastructure.readers.json_reader import JsonSourceReader, parse
from docconvert.infrastructure.readers.xml_reader import XmlSourceReader, read_xml

__all__ = [
    "CsvSourceReader",
    "JsonSourceReader",
    "XmlSourceReader",
    "parse",
    "read_csv",
    "read_xml",
]
