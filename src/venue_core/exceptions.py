"""Domain-specific exceptions for venue_core.

The aggregation marts never raise for data conditions; they return zero or
empty results instead. These exceptions are raised only at the edges of the
package: loading JSON snapshots and ingesting the source workbook.
All exceptions inherit from VenueCoreError for easy catching.
"""


class VenueCoreError(Exception):
    """Base exception for all venue_core errors."""

    pass


class ConfigError(VenueCoreError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - An unknown dataset name is requested
    - Required configuration values are missing or invalid
    """

    pass


class DataQualityError(VenueCoreError):
    """Raised when input records cannot be interpreted.

    This exception is raised when:
    - A JSON snapshot is not a list of flat records
    - Required columns are missing from a DataFrame passed to a QA check
    """

    pass


class IngestionError(VenueCoreError):
    """Raised when the source workbook cannot be converted.

    This exception is raised when:
    - A required sheet is missing from the workbook
    - The header row of the sales sheet cannot be located
    """

    pass
