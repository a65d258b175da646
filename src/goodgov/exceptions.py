"""
Custom exceptions for the goodgov package.

This module defines a hierarchy of exceptions to provide more
precise error handling across loading and view configuration.
Data problems (malformed cells, missing values) never raise; they
propagate as null/NaN through the pipeline.
"""


class GoodGovBaseError(Exception):
    """
    Base exception for all goodgov errors.

    All custom exceptions in the package inherit from this class.
    """

    pass


class ConfigurationError(GoodGovBaseError):
    """
    Raised when there are configuration-related issues.

    This exception is used when:
    - Environment settings do not parse
    - Configuration values are out of range
    """

    pass


class ViewConfigurationError(ConfigurationError):
    """
    Raised when a view is requested with an unknown metric, scale,
    sort order or display option id.
    """

    pass


class IngestError(GoodGovBaseError):
    """
    Raised when the dataset cannot be loaded.

    Covers errors such as:
    - Missing CSV resource
    - Network failures for remote sources
    - Unreadable CSV content

    A load failure is fatal and is not retried.
    """

    pass


class SchemaError(IngestError):
    """
    Raised when the CSV header lacks one of the required columns.
    """

    pass


class S3ConfigurationError(IngestError):
    """
    Raised for S3 credential or secret setup issues when the
    dataset is read from an ``s3://`` URI.
    """

    pass
