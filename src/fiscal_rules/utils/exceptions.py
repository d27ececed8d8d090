"""Custom exceptions for the fiscal rules package."""


class FiscalRulesError(Exception):
    """Base exception for fiscal rules errors."""

    pass


class TransactionParseError(FiscalRulesError):
    """Error parsing a transactions CSV export."""

    pass


class DonorParseError(FiscalRulesError):
    """Error parsing a donors CSV export."""

    pass


class ConfigurationError(FiscalRulesError):
    """Error in configuration."""

    pass


class ReportGenerationError(FiscalRulesError):
    """Error generating Excel report."""

    pass
