"""
Export module for CSV generation.
"""
from recordcsv.export.csv_exporter import export_csv

__all__ = [
    "export_csv",
]
