import logging
import sys

# 1. Set up a handler and formatter for console output.
# Every module logger (using __name__) propagates to the package logger.
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(
    logging.DEBUG
)  # The handler should process all messages
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
console_handler.setFormatter(formatter)

# 2. Attach it to the package logger. Per-iteration verdicts are logged at
# DEBUG, so the default level only lets terminal transitions through.
package_logger = logging.getLogger(__name__)
package_logger.setLevel(logging.INFO)
package_logger.addHandler(console_handler)

# 3. Keep package records off the root logger so an application that also
# configures logging does not print each line twice.
package_logger.propagate = False
