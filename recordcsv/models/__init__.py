from recordcsv.models.csv_model import CsvModel

__all__ = ["CsvModel"]
