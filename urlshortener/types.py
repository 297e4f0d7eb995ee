from typing import Any, TypeAlias


# Type aliases for Python dictionaries
LambdaEvent: TypeAlias = dict[str, Any]
LambdaContext: TypeAlias = Any
LambdaResponse: TypeAlias = dict[str, Any]
LambdaConfiguration: TypeAlias = dict[str, Any]
HttpHeaders: TypeAlias = dict[str, str]
StoreItem: TypeAlias = dict[str, Any]
