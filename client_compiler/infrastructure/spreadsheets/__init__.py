from .openpyxl_client_spreadsheet import OpenpyxlClientSpreadsheet

__all__ = ["OpenpyxlClientSpreadsheet"]
