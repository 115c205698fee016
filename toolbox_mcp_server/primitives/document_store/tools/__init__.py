"""Import every document-store tool module; import order is catalog order."""
from . import find_tool  # noqa: F401
from . import find_one_tool  # noqa: F401
from . import count_tool  # noqa: F401
from . import list_collections_tool  # noqa: F401
