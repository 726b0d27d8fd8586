import logging 


class Loggable(object): 
    """Per-instance logging helpers shared by the DatabaseConnection and its ResultCursor."""

    enable_logging:bool             # Whether this instance writes logs at all
    logger:logging.Logger|None      # Logger for debug/info/etc


    # ---- Helper functions for standardizing logging ---- #
    def _log(
        self,
        level:int,
        fmt:str,
        *args,
        exc:BaseException|None=None,
        stacklevel:int=2,
    ) -> None:
        """Helper func to standardize logging format (or do nothing if not [self.enable_logging] or not [self.logger]). 
        Log format is: "[calling_function]: [message|Exception]" """

        # Check if enable logging is True
        if not getattr(self, "enable_logging", False): return

        # Make sure self.logger is not None
        logger:logging.Logger = getattr(self, "logger", None)
        if logger is None: return

        # Write to the log
        logger.log(level, fmt, *args, exc_info=exc, stacklevel=stacklevel)


    def log_debug(self, calling_func:str, message:str, stacklevel:int=2) -> None: 
        """Logs a DEBUG message."""
        self._log(logging.DEBUG, "%s: %s", calling_func, message, stacklevel=stacklevel)


    def log_warning(self, calling_func:str, message:str, stacklevel:int=2) -> None: 
        """Logs a WARNING message."""
        self._log(logging.WARNING, "%s error (non-critical): %s", calling_func, message, stacklevel=stacklevel)


    def log_error(self, calling_func:str, exception:Exception, stacklevel:int=2) -> None: 
        """Logs an ERROR message."""
        self._log(logging.ERROR, "%s failed: %s - %s", calling_func, type(exception).__name__, exception, exc=exception, stacklevel=stacklevel)
