"""Export formats for tracked applications."""

from .csv_export import COLUMNS, application_to_row, export_filename, render_csv

__all__ = ["COLUMNS", "application_to_row", "export_filename", "render_csv"]
