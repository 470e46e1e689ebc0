
import logging
from rich.console import Console
from rich.logging import RichHandler
def setup_logging(level: str = "WARNING"):
    # stdout belongs to the reporters
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]",
                        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)])
    log = logging.getLogger("rerun_testkit")
    log.setLevel(level)
    return log
