"""Fleet billing engine for vehicle rental tripsheets, invoices and salaries."""

__version__ = "1.0.0"
