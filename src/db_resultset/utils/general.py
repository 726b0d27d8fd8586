import logging 
import os 


def setup_logger(log_file_path:str, logger_name:str, min_level:int=logging.DEBUG, log_format:str='%(asctime)s - %(levelname)s: %(message)s') -> logging.Logger:
    """Sets up a logger to save logs to the given filepath."""
    
    # Init a logger and set the lowest level to DEBUG (so all logs are captured)
    logger:logging.Logger = logging.getLogger(logger_name)
    logger.setLevel(min_level)
    
    # Prevent double logging if root logger is used
    logger.propagate = False  

    # Avoid duplicate handlers if setup is called multiple times
    if not logger.handlers:
        
        # NOTE: default path if log file path is None or empty string
        if log_file_path is None or not log_file_path: 
            log_file_path = './database_connection.log'

        # Create the output dir if it doesn't exist (a bare file name has no dir part)
        log_dir:str = os.path.dirname(log_file_path)
        if log_dir: 
            os.makedirs(log_dir, exist_ok=True)

        # Create a file handler
        file_handler:logging.FileHandler = logging.FileHandler(log_file_path, encoding='utf-8')
        logger.addHandler(file_handler)
        
        # Set the format for logs 
        formatter:logging.Formatter = logging.Formatter(log_format)
        file_handler.setFormatter(formatter)
        
    # Return the logger
    return logger


def column_names(description) -> list[str]: 
    """Returns the column names from a DB-API cursor.description (empty list if the statement returned no result set)."""
    if not description: return []
    return [d[0] for d in description]
