import logging

from rich.logging import RichHandler

from openapi_autodoc.utilities.logging import ROOT_LOGGER, configure_logging, get_logger


class TestLogging:
    def test_get_logger_is_namespaced(self):
        logger = get_logger("openapi_autodoc.schema.objects")
        assert logger.name == "AutoDoc.openapi_autodoc.schema.objects"
        assert logger.name.startswith(ROOT_LOGGER + ".")

    def test_configure_logging_sets_level(self):
        configure_logging("DEBUG")
        assert logging.getLogger(ROOT_LOGGER).level == logging.DEBUG
        configure_logging("WARNING")
        assert logging.getLogger(ROOT_LOGGER).level == logging.WARNING

    def test_configure_logging_does_not_stack_handlers(self):
        configure_logging()
        configure_logging()
        handlers = logging.getLogger(ROOT_LOGGER).handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)

    def test_module_loggers_propagate(self, caplog):
        configure_logging("INFO")
        with caplog.at_level(logging.WARNING):
            get_logger("tests").warning("something odd")
        assert "something odd" in caplog.text
