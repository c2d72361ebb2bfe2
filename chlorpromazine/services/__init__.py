"""External collaborators used by the tool handlers."""

from .file_reader import FileReaderService
from .protocols import ProjectFileReader, SearchService
from .serpapi_client import SerpApiClient

__all__ = [
    "FileReaderService",
    "ProjectFileReader",
    "SearchService",
    "SerpApiClient",
]
