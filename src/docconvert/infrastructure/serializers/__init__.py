"""Text-format serializers."""

from docconvert.infrastructure.serializers.csv_serializer import CsvSerializer, to_csv
from docconvert.infrastructure.serializers.html_serializer import HtmlSerializer
from docconvert.infrastructure.serializers.json_serializer import JsonSerializer, to_json
from docconvert.infrastructure.serializers.text_serializer import TextSerializer, format_value
from docconvert.infrastructure.serializers.xml_serializer import XmlSerializer, to_xml

__all__ = [
    "CsvSerializer",
    "HtmlSerializer",
    "JsonSerializer",
    "TextSerializer",
    "XmlSerializer",
    "format_value",
    "to_csv",
    "to_json",
    "to_xml",
]
