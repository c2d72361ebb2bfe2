"""Narrow interfaces the tool handlers depend on."""

from typing import Protocol


class SearchService(Protocol):
    def is_configured(self) -> bool: ...

    async def search(self, query: str) -> str: ...


class ProjectFileReader(Protocol):
    async def read_project_files(self) -> str: ...
