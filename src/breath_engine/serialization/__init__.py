"""Serialization module — persisted JSON layout and CSV export of session records."""

from breath_engine.serialization.csv_export import to_csv_string, to_dataframe
from breath_engine.serialization.records import (
    record_from_dict,
    record_to_dict,
    records_from_json_string,
    records_to_json_string,
)

__all__ = [
    "record_from_dict",
    "record_to_dict",
    "records_from_json_string",
    "records_to_json_string",
    "to_csv_string",
    "to_dataframe",
]
