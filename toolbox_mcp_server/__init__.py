"""
Toolbox MCP Server - tool-invocation servers over MCP stdio.

Two instances share one protocol skeleton: a file-system server
(read_file, list_files, create_file, create_folder) and a MongoDB
document-store server (find, find_one, count, list_collections).
"""

__version__ = "1.0.0"
