from datetime import date
from typing import List, Optional
from ..schemas.movies_schemas import SortKey
from ..schemas.session_schemas import FilterOptions, GenreOption, LanguageOption

OLDEST_YEAR = 2000

GENRES = [
    GenreOption(id=28, name='Action'),
    GenreOption(id=12, name='Adventure'),
    GenreOption(id=16, name='Animation'),
    GenreOption(id=35, name='Comedy'),
    GenreOption(id=80, name='Crime'),
    GenreOption(id=99, name='Documentary'),
    GenreOption(id=18, name='Drama'),
    GenreOption(id=10751, name='Family'),
    GenreOption(id=14, name='Fantasy'),
    GenreOption(id=36, name='History'),
    GenreOption(id=27, name='Horror'),
    GenreOption(id=10402, name='Music'),
    GenreOption(id=9648, name='Mystery'),
    GenreOption(id=10749, name='Romance'),
    GenreOption(id=878, name='Science Fiction'),
    GenreOption(id=10770, name='TV Movie'),
    GenreOption(id=53, name='Thriller'),
    GenreOption(id=10752, name='War'),
    GenreOption(id=37, name='Western'),
]

LANGUAGES = [
    LanguageOption(code='en', name='English'),
    LanguageOption(code='es', name='Spanish'),
    LanguageOption(code='fr', name='French'),
    LanguageOption(code='ja', name='Japanese'),
    LanguageOption(code='de', name='German'),
    LanguageOption(code='it', name='Italian'),
    LanguageOption(code='ko', name='Korean'),
    LanguageOption(code='pt', name='Portuguese'),
    LanguageOption(code='ru', name='Russian'),
    LanguageOption(code='zh', name='Chinese'),
    LanguageOption(code='ar', name='Arabic'),
]


def year_options(current_year: Optional[int] = None) -> List[int]:
    """Selectable release years, newest first."""
    newest = current_year or date.today().year
    return list(range(newest, OLDEST_YEAR - 1, -1))


def filter_options(current_year: Optional[int] = None) -> FilterOptions:
    return FilterOptions(
        sort_keys=[key.value for key in SortKey],
        genres=GENRES,
        languages=LANGUAGES,
        years=year_options(current_year),
    )
