"""Error kinds raised by detimer.

Every error is fatal for the operation that raised it: nothing in the
package retries.  ``main()`` maps each kind to an exit status.
"""

from __future__ import annotations


class DetimerError(Exception):
    """Base class for all detimer errors."""


class InvalidInput(DetimerError, ValueError):
    """A duration or run configuration that cannot be used."""


class SinkIOError(DetimerError, OSError):
    """Writing to an output sink (or creating it) failed."""


class AudioError(DetimerError):
    """The notification sound is missing, undecodable, or cannot be played."""
