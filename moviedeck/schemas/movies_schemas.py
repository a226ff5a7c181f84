from datetime import date
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class SortKey(str, Enum):
    popularity_desc = 'popularity.desc'
    rating_desc = 'vote_average.desc'
    release_desc = 'release_date.desc'


class FilterState(BaseModel):
    """
    Discover filters. Always replaced as a whole; FilterState() is the
    cleared value.
    """
    sort_by: SortKey = SortKey.popularity_desc
    year: Optional[int] = Field(default=None, ge=1000, le=9999)
    genre_id: Optional[int] = None
    original_language: Optional[str] = Field(
        default=None, pattern=r'^[a-z]{2}$')

    model_config = ConfigDict(frozen=True)

    @field_validator('year', 'genre_id', 'original_language', mode='before')
    @classmethod
    def _blank_is_unset(cls, value):
        # the filter panel sends "" for "All ..."
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_active_filters(self) -> bool:
        return bool(
            self.year or self.genre_id or self.original_language
            or self.sort_by != SortKey.popularity_desc
        )


class MovieSummary(BaseModel):
    id: int
    title: str = ''
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
    vote_average: Optional[float] = Field(default=None, ge=0, le=10)
    vote_count: Optional[int] = Field(default=None, ge=0)
    original_language: Optional[str] = None
    popularity: Optional[float] = None
    genre_ids: List[int] = []

    model_config = ConfigDict(frozen=True, extra='ignore')

    @field_validator('release_date', mode='before')
    @classmethod
    def _empty_date(cls, value):
        return value or None

    @property
    def release_year(self) -> Optional[int]:
        return self.release_date.year if self.release_date else None


class Genre(BaseModel):
    id: int
    name: str


class SpokenLanguage(BaseModel):
    iso_639_1: str
    english_name: Optional[str] = None
    name: Optional[str] = None


class ProductionCountry(BaseModel):
    iso_3166_1: str
    name: str


class ProductionCompany(BaseModel):
    id: int
    name: str
    logo_path: Optional[str] = None
    origin_country: Optional[str] = None


class MovieDetail(MovieSummary):
    original_title: Optional[str] = None
    tagline: Optional[str] = None
    status: Optional[str] = None
    runtime: Optional[int] = None
    adult: Optional[bool] = None
    homepage: Optional[str] = None
    imdb_id: Optional[str] = None
    budget: Optional[int] = None
    revenue: Optional[int] = None
    genres: List[Genre] = []
    spoken_languages: List[SpokenLanguage] = []
    production_countries: List[ProductionCountry] = []
    production_companies: List[ProductionCompany] = []

    @field_validator('homepage', 'imdb_id', 'tagline', mode='before')
    @classmethod
    def _empty_string(cls, value):
        return value or None

    @computed_field
    @property
    def profit(self) -> Optional[int]:
        if self.budget and self.revenue and self.budget > 0 and self.revenue > 0:
            return self.revenue - self.budget
        return None

    @computed_field
    @property
    def imdb_url(self) -> Optional[str]:
        if not self.imdb_id:
            return None
        return f"https://www.imdb.com/title/{self.imdb_id}"


class ErrorResponse(BaseModel):
    code: int
    message: str
