from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, computed_field
from .movies_schemas import FilterState, MovieSummary


class QueryMode(str, Enum):
    browse = 'browse'
    search = 'search'


class QuerySession(BaseModel):
    """
    State owned by the query controller and rendered by the front end.

    accumulated_results only grows while page_cursor advances; a search or
    filter edit sets the cursor back to 1 and the next successful page
    replaces the list.
    """
    search_text: str = ''
    filters: FilterState = Field(default_factory=FilterState)
    page_cursor: int = Field(default=1, ge=1)
    accumulated_results: List[MovieSummary] = []
    loading: bool = False
    error: Optional[str] = None

    @computed_field
    @property
    def mode(self) -> QueryMode:
        return QueryMode.search if self.search_text.strip() else QueryMode.browse


class SearchTextUpdate(BaseModel):
    text: str = ''


class GenreOption(BaseModel):
    id: int
    name: str


class LanguageOption(BaseModel):
    code: str
    name: str


class FilterOptions(BaseModel):
    sort_keys: List[str]
    genres: List[GenreOption]
    languages: List[LanguageOption]
    years: List[int]
