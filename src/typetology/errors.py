class TypetologyError(Exception):
    """
    Base class for all typetology errors.

    This exception serves as the root of the typetology error hierarchy.
    """
    pass


class AbiParseError(TypetologyError, ValueError):
    """
    Raised when an ABI document is malformed or incomplete.

    Examples include invalid JSON, a top-level value that is not an object,
    or a missing ``hash`` / ``functions`` field.
    """
    pass


class FunctionNotFoundError(TypetologyError, LookupError):
    """
    Raised when a function name has no matching descriptor in the ABI.

    Attributes:
        function_name: The name that could not be resolved.
    """

    def __init__(self, function_name: str):
        super().__init__(f"Function '{function_name}' not found in ABI")
        self.function_name = function_name


class ConversionError(TypetologyError, TypeError):
    """
    Raised when a value cannot be converted to the kind it is declared as.

    This covers positional arguments whose runtime shape does not match the
    declared parameter kind, as well as malformed keys and addresses.
    """
    pass


class InvalidParameterError(TypetologyError, ValueError):
    """
    Raised when a provided parameter is invalid or malformed.

    This indicates that the arguments passed to a method do not meet
    the expected criteria, e.g. the wrong number of positional arguments.
    """
    pass


class StorageError(TypetologyError):
    """
    Raised when the network reports a failure for a storage lookup.

    Attributes:
        code: Error code reported by the node.
        desc: Error description reported by the node.
    """

    def __init__(self, code: int, desc: str | None = None):
        super().__init__(f"failed to get storage (Error Code: {code}, Msg: {desc})")
        self.code = code
        self.desc = desc


class NetworkError(TypetologyError):
    """
    Raised on network-level failures.

    Examples include REST connectivity issues or non-JSON responses.
    """
    pass


class SubmissionError(NetworkError):
    """
    Raised when a signed transaction could not be delivered to the network.

    Attributes:
        response: Optional decoded response body returned by the node.
    """

    def __init__(self, message: str, response: dict | None = None):
        super().__init__(message)
        self.response = response
