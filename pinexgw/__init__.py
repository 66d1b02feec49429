"""Message routing for gateways: prefix tables, rule matching, target selection and helpers."""

__version__ = "1.6.23"