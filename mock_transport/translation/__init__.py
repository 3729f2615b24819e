from mock_transport.translation.translator import ErrorTranslator, adapt_error

__all__ = ["ErrorTranslator", "adapt_error"]
