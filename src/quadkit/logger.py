"""Contains the name for the logger of quadkit modules.

``quadkit`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``DEBUG``: Which integration strategy was chosen and how many
    subintervals a pass consumed.
* ``WARNING``: An indication that an integration did not finish cleanly
    (tolerance not met, divergence, non-finite integrand values).

By default, only messages of level ``WARNING`` are displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``quadkit.logger.quadkit_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "quadkit"
quadkit_logger = logging.getLogger(logger_name)
