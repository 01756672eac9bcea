# elastic_ransack/search.py
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from elastic_ransack.backends.base import Backend
from elastic_ransack.compiler import CompiledQuery, QueryCompiler
from elastic_ransack.config import Settings
from elastic_ransack.models import Model, Page
from elastic_ransack.query.sort import SortField

logger = logging.getLogger(__name__)


class Search:
    """A filtered, sorted and paginated search over one model.

    The query is compiled and executed lazily, at most once per instance;
    later calls reuse the cached page. Instances are not thread-safe.

    Examples:
        search = Search(articles, {"title_cont": "python", "s": "created_at desc"}, backend)
        for record in search:
            print(record["title"])
        print(search.total_entries, search.total_pages)
    """

    def __init__(
        self,
        model: Model,
        params: Mapping[str, Any] | None,
        backend: Backend,
        *,
        page: int | str | None = 1,
        per_page: int | str | None = None,
        globalize: bool = True,
        fields: Iterable[str] | None = None,
        escape: bool | None = None,
        locale: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.model = model
        self.params = dict(params or {})
        self.backend = backend
        self.globalize = globalize
        self._compiler = QueryCompiler(
            model,
            globalize=globalize,
            escape=escape,
            locale=locale,
            fields=fields,
            settings=settings,
        )
        self.page = int(page or 1)
        self.per_page = int(per_page or self._compiler.settings.default_per_page)
        self._compiled: CompiledQuery | None = None
        self._results: Page | None = None

    @property
    def compiled(self) -> CompiledQuery:
        if self._compiled is None:
            self._compiled = self._compiler.compile(self.params)
        return self._compiled

    @property
    def sorts(self) -> tuple[SortField, ...]:
        return self.compiled.sort

    def search(self) -> Page:
        """Execute the search; repeated calls return the cached page."""
        if self._results is None:
            logger.debug("Searching %s page %s (%s per page)", self.model.index, self.page, self.per_page)
            self._results = self.backend.search(
                self.model.index,
                self.compiled.to_body(),
                page=self.page,
                per_page=self.per_page,
            )
        return self._results

    def translate(self, name: str) -> str:
        """Human readable label of an attribute."""
        return self.model.human_attribute_name(name)

    # Result delegation

    @property
    def results(self) -> list[dict[str, Any]]:
        return self.search().hits

    @property
    def records(self) -> list[dict[str, Any]]:
        return self.search().records

    @property
    def total_entries(self) -> int:
        return self.search().total_entries

    @property
    def total_pages(self) -> int:
        return self.search().total_pages

    @property
    def current_page(self) -> int:
        return self.search().current_page

    @property
    def previous_page(self) -> int | None:
        return self.search().previous_page

    @property
    def next_page(self) -> int | None:
        return self.search().next_page

    @property
    def offset(self) -> int:
        return self.search().offset

    @property
    def out_of_bounds(self) -> bool:
        return self.search().out_of_bounds

    @property
    def empty(self) -> bool:
        return self.search().empty

    def with_hits(self) -> Iterator[tuple[dict[str, Any], dict[str, Any]]]:
        return self.search().with_hits()

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.search())

    def __len__(self) -> int:
        return len(self.search())

    def __getitem__(self, index: int) -> dict[str, Any]:
        return self.search()[index]
