"""Import every file-system tool module; import order is catalog order."""
from . import read_file_tool  # noqa: F401
from . import list_files_tool  # noqa: F401
from . import create_file_tool  # noqa: F401
from . import create_folder_tool  # noqa: F401
