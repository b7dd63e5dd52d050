from collections.abc import Callable
from typing import TypeVar

from dependency_injector import containers, providers
from dependency_injector.providers import Provider
from sqlalchemy.orm import Session

from readmark.application.library.services.book_search_service import BookSearchService
from readmark.application.library.services.reading_progress_service import (
    ReadingProgressService,
)
from readmark.application.reading.services.annotation_store import AnnotationStore
from readmark.application.reading.services.bookmark_service import BookmarkService
from readmark.application.reading.services.highlight_session import HighlightSession
from readmark.config import get_settings
from readmark.infrastructure.library.repositories import BookRepository
from readmark.infrastructure.reading.repositories import BookmarkRepository, HighlightRepository

T = TypeVar("T")


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Callable(get_settings)

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Repositories
    book_repository = providers.Factory(BookRepository, db=db)
    bookmark_repository = providers.Factory(BookmarkRepository, db=db)
    highlight_repository = providers.Factory(HighlightRepository, db=db)

    # Reading module
    annotation_store = providers.Factory(
        AnnotationStore,
        bookmark_repository=bookmark_repository,
        highlight_repository=highlight_repository,
    )
    # The open document, when there is one, is supplied per reader view so
    # listings follow reading order
    bookmark_service = providers.Factory(BookmarkService, store=annotation_store)
    # book_id, overlay and selection are supplied per reader view
    highlight_session = providers.Factory(
        HighlightSession,
        store=annotation_store,
        settings=settings,
    )

    # Library module; the document is supplied per opened book
    book_search_service = providers.Factory(BookSearchService, settings=settings)
    reading_progress_service = providers.Factory(
        ReadingProgressService, book_repository=book_repository
    )


def provide_with_session(provider: Provider[T], db: Session) -> Callable[..., T]:
    """
    Bind a provider to a database session.

    Returns a callable that builds the provided object with db overridden,
    forwarding any per-call arguments.
    """

    def build(*args: object, **kwargs: object) -> T:
        try:
            container.db.override(db)
            return provider(*args, **kwargs)
        finally:
            container.db.reset_override()

    return build


# Initialize container
container = Container()
