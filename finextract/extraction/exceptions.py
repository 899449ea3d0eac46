class ExtractionFailure(Exception):
    """Raised when the remote call does not produce a valid, schema-conforming result.

    Transport errors, timeouts, malformed JSON and missing payloads all surface
    as this single type.
    """
