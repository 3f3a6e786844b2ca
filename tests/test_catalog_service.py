"""
Catalog Service Tests

Tests for the business rules behind the GraphQL resolvers:
- allBooks filter combinations
- addBook validation, author find-or-create and notification
- editAuthor / addAuthor
- live author book counts

Runs against both stores through the ``catalog`` fixture.
"""

import pytest

from bookcatalog.errors import (
    AuthenticationRequired,
    ErrorCode,
    PersistenceFailure,
    ValidationError,
)
from bookcatalog.services.catalog import ALL_GENRES, CatalogService, normalize_genres

DEMO_BOOKS = [
    ("Clean Code", "Robert Martin", 2008, ["refactoring"]),
    ("Agile software development", "Robert Martin", 2002, ["agile", "patterns", "design"]),
    ("Refactoring, edition 2", "Martin Fowler", 2018, ["refactoring"]),
    ("Refactoring to patterns", "Joshua Kerievsky", 2008, ["refactoring", "patterns"]),
    ("Crime and punishment", "Fyodor Dostoevsky", 1866, ["classic", "crime"]),
]


@pytest.fixture
def demo_catalog(catalog: CatalogService, user) -> CatalogService:
    """Catalog pre-filled with a handful of well-known books."""
    for title, author, published, genres in DEMO_BOOKS:
        catalog.add_book(user, title, author, published, genres)
    return catalog


def titles(books) -> list[str]:
    return [b.title for b in books]


# =============================================================================
# Query Tests
# =============================================================================


class TestAllBooks:
    """Tests for allBooks filter resolution."""

    def test_no_filters_returns_everything(self, demo_catalog: CatalogService):
        books = demo_catalog.all_books()

        assert titles(books) == [b[0] for b in DEMO_BOOKS]
        assert all(b.author.name for b in books)

    def test_filter_by_author(self, demo_catalog: CatalogService):
        books = demo_catalog.all_books(author_name="Robert Martin")

        assert titles(books) == ["Clean Code", "Agile software development"]
        assert {b.author.name for b in books} == {"Robert Martin"}

    def test_filter_by_genre(self, demo_catalog: CatalogService):
        books = demo_catalog.all_books(genre="patterns")

        assert titles(books) == ["Agile software development", "Refactoring to patterns"]

    def test_filter_by_author_and_genre(self, demo_catalog: CatalogService):
        books = demo_catalog.all_books(author_name="Robert Martin", genre="refactoring")

        assert titles(books) == ["Clean Code"]

    def test_all_genres_sentinel_means_no_filter(self, demo_catalog: CatalogService):
        assert demo_catalog.all_books(genre=ALL_GENRES) == demo_catalog.all_books()

        by_author = demo_catalog.all_books(author_name="Robert Martin", genre=ALL_GENRES)
        assert titles(by_author) == ["Clean Code", "Agile software development"]

    def test_empty_strings_mean_not_provided(self, demo_catalog: CatalogService):
        assert demo_catalog.all_books(author_name="", genre="") == demo_catalog.all_books()

    def test_unknown_author_returns_empty_list(self, demo_catalog: CatalogService):
        assert demo_catalog.all_books(author_name="Nobody Known") == []
        assert demo_catalog.all_books(author_name="Nobody Known", genre="classic") == []

    def test_unknown_genre_returns_empty_list(self, demo_catalog: CatalogService):
        assert demo_catalog.all_books(genre="poetry") == []


class TestCounts:
    """Tests for bookCount, authorCount and Author.bookCount."""

    def test_counts(self, demo_catalog: CatalogService):
        assert demo_catalog.book_count() == 5
        assert demo_catalog.author_count() == 4

    def test_author_book_count_is_live(self, demo_catalog: CatalogService, user):
        martin = demo_catalog.store.find_author_by_name("Robert Martin")
        assert demo_catalog.author_book_count(martin.id) == 2

        demo_catalog.add_book(user, "The Clean Coder", "Robert Martin", 2011, ["career"])

        assert demo_catalog.author_book_count(martin.id) == 3

    def test_author_without_books(self, catalog: CatalogService):
        author = catalog.add_author("Sandi Metz")

        assert catalog.author_book_count(author.id) == 0

    def test_all_authors_in_insertion_order(self, demo_catalog: CatalogService):
        names = [a.name for a in demo_catalog.all_authors()]

        assert names == ["Robert Martin", "Martin Fowler", "Joshua Kerievsky", "Fyodor Dostoevsky"]


# =============================================================================
# addBook Tests
# =============================================================================


class TestAddBook:
    """Tests for the addBook sequence."""

    def test_add_book_with_existing_author(self, catalog: CatalogService, user):
        catalog.add_author("Jane Doe", 1975)

        book = catalog.add_book(user, "Valid Title", "Jane Doe", 2020, ["x"])

        assert book.author.name == "Jane Doe"
        assert book.author.born == 1975
        assert catalog.author_count() == 1
        assert catalog.author_book_count(book.author.id) == 1

    def test_add_book_creates_unknown_author_once(self, catalog: CatalogService, user):
        first = catalog.add_book(user, "Crime and punishment", "Fyodor Dostoevsky", 1866, ["classic"])
        second = catalog.add_book(user, "The Demon", "Fyodor Dostoevsky", 1872, ["classic"])

        assert catalog.author_count() == 1
        assert first.author.id == second.author.id
        assert first.author.born is None

    def test_requires_authentication(self, catalog: CatalogService, sink):
        with pytest.raises(AuthenticationRequired) as exc_info:
            catalog.add_book(None, "Clean Code", "Robert Martin", 2008, ["refactoring"])

        assert exc_info.value.extensions["code"] == ErrorCode.UNAUTHENTICATED
        assert catalog.book_count() == 0
        assert catalog.author_count() == 0
        assert sink.books == []

    def test_auth_checked_before_validation(self, catalog: CatalogService):
        # Invalid input must still report the missing user first
        with pytest.raises(AuthenticationRequired):
            catalog.add_book(None, "X", "Y", 2008, [""])

    def test_short_title_rejected(self, catalog: CatalogService, user):
        with pytest.raises(ValidationError) as exc_info:
            catalog.add_book(user, "Code", "Robert Martin", 2008, ["refactoring"])

        error = exc_info.value
        assert error.message.startswith("Title must be unique")
        assert error.extensions["code"] == ErrorCode.BAD_USER_INPUT
        assert error.extensions["invalidArgs"] == "Code"
        assert error.extensions["reasons"] == ["title_too_short"]
        assert catalog.book_count() == 0
        assert catalog.author_count() == 0

    def test_short_author_name_rejected(self, catalog: CatalogService, user):
        with pytest.raises(ValidationError) as exc_info:
            catalog.add_book(user, "Clean Code", "Bob", 2008, ["refactoring"])

        assert exc_info.value.extensions["reasons"] == ["author_name_too_short"]
        assert catalog.author_count() == 0

    def test_all_reasons_reported_together(self, catalog: CatalogService, user):
        with pytest.raises(ValidationError) as exc_info:
            catalog.add_book(user, "Code", "Bob", 2008, ["ok", ""])

        assert exc_info.value.extensions["reasons"] == [
            "title_too_short",
            "author_name_too_short",
            "empty_genre",
        ]

    def test_duplicate_title_rejected(self, catalog: CatalogService, user, sink):
        catalog.add_book(user, "Clean Code", "Robert Martin", 2008, ["refactoring"])

        with pytest.raises(ValidationError) as exc_info:
            catalog.add_book(user, "Clean Code", "Martin Fowler", 2010, ["design"])

        assert exc_info.value.extensions["reasons"] == ["duplicate_title"]
        assert catalog.book_count() == 1
        assert catalog.author_count() == 1
        assert len(sink.books) == 1

    def test_duplicate_genres_collapsed(self, catalog: CatalogService, user):
        book = catalog.add_book(user, "Clean Code", "Robert Martin", 2008, ["design", "refactoring", "design"])

        assert book.genres == ["design", "refactoring"]

    def test_empty_genre_list_allowed(self, catalog: CatalogService, user):
        book = catalog.add_book(user, "Clean Code", "Robert Martin", 2008, [])

        assert book.genres == []

    def test_notifies_once_with_created_book(self, catalog: CatalogService, user, sink):
        book = catalog.add_book(user, "Clean Code", "Robert Martin", 2008, ["refactoring"])

        assert sink.books == [book]

    def test_notification_failure_does_not_fail_mutation(self, store, user):
        class BrokenSink:
            def book_added(self, book):
                raise RuntimeError("hub is down")

        catalog = CatalogService(store, BrokenSink())

        book = catalog.add_book(user, "Clean Code", "Robert Martin", 2008, ["refactoring"])

        assert catalog.store.get_book(book.id) is not None

    def test_lost_title_race_maps_to_validation_error(self, catalog: CatalogService, user, monkeypatch):
        catalog.add_book(user, "Clean Code", "Robert Martin", 2008, ["refactoring"])
        # Simulate a concurrent insert that happened after our existence check
        monkeypatch.setattr(catalog.store, "find_book_by_title", lambda title: None)

        with pytest.raises(ValidationError) as exc_info:
            catalog.add_book(user, "Clean Code", "Robert Martin", 2008, ["refactoring"])

        assert exc_info.value.extensions["reasons"] == ["duplicate_title"]
        assert catalog.book_count() == 1

    def test_author_creation_failure_wrapped(self, catalog: CatalogService, user, monkeypatch):
        from bookcatalog.store import StoreError

        def failing_get_or_create(name):
            raise StoreError("connection lost")

        monkeypatch.setattr(catalog.store, "get_or_create_author", failing_get_or_create)

        with pytest.raises(PersistenceFailure) as exc_info:
            catalog.add_book(user, "Clean Code", "Robert Martin", 2008, ["refactoring"])

        error = exc_info.value
        assert error.message == "Adding new author failed or author name is too short"
        assert error.extensions["invalidArgs"] == {"author": "Robert Martin"}
        assert error.extensions["cause"] == "connection lost"
        assert isinstance(error.cause, StoreError)
        assert catalog.book_count() == 0

    def test_book_store_failure_wrapped(self, catalog: CatalogService, user, monkeypatch):
        from bookcatalog.store import StoreError

        def failing_create_book(**kwargs):
            raise StoreError("value too long for type character varying(500)")

        monkeypatch.setattr(catalog.store, "create_book", failing_create_book)

        with pytest.raises(PersistenceFailure) as exc_info:
            catalog.add_book(user, "Clean Code", "Robert Martin", 2008, ["refactoring"])

        error = exc_info.value
        assert error.message == "Adding the book failed"
        assert error.extensions["code"] == ErrorCode.BAD_USER_INPUT
        assert error.extensions["kind"] == "PersistenceFailure"
        assert error.extensions["invalidArgs"] == "Clean Code"
        assert isinstance(error.cause, StoreError)
        assert catalog.book_count() == 0

    def test_overlong_values_rejected_before_storing(self, catalog: CatalogService, user):
        with pytest.raises(ValidationError) as exc_info:
            catalog.add_book(user, "x" * 501, "R" * 256, 2008, ["g" * 101])

        assert exc_info.value.extensions["reasons"] == [
            "title_too_long",
            "author_name_too_long",
            "genre_too_long",
        ]
        assert catalog.author_count() == 0
        assert catalog.book_count() == 0

    def test_values_at_the_length_limit_accepted(self, catalog: CatalogService, user):
        book = catalog.add_book(user, "x" * 500, "R" * 255, 2008, ["g" * 100])

        assert len(book.title) == 500
        assert book.genres == ["g" * 100]


# =============================================================================
# Author Mutation Tests
# =============================================================================


class TestAddAuthor:
    """Tests for addAuthor."""

    def test_add_author(self, catalog: CatalogService):
        author = catalog.add_author("Robert Martin", 1952)

        assert author.id is not None
        assert author.born == 1952
        assert catalog.author_count() == 1

    def test_add_author_without_birth_year(self, catalog: CatalogService):
        assert catalog.add_author("Sandi Metz").born is None

    def test_add_author_needs_no_user(self, catalog: CatalogService):
        # No current user argument at all: addAuthor is public
        assert catalog.add_author("Martin Fowler").name == "Martin Fowler"

    def test_duplicate_author_is_persistence_failure(self, catalog: CatalogService):
        catalog.add_author("Robert Martin")

        with pytest.raises(PersistenceFailure) as exc_info:
            catalog.add_author("Robert Martin")

        assert exc_info.value.extensions["invalidArgs"] == {"name": "Robert Martin", "born": None}
        assert catalog.author_count() == 1

    def test_short_author_name_is_persistence_failure(self, catalog: CatalogService):
        with pytest.raises(PersistenceFailure):
            catalog.add_author("Bob")

    def test_add_author_does_not_notify(self, catalog: CatalogService, sink):
        catalog.add_author("Robert Martin")

        assert sink.books == []


class TestEditAuthor:
    """Tests for editAuthor."""

    def test_edit_author(self, catalog: CatalogService, user):
        catalog.add_author("Robert Martin")

        author = catalog.edit_author(user, "Robert Martin", 1958)

        assert author.born == 1958
        assert catalog.store.find_author_by_name("Robert Martin").born == 1958

    def test_unknown_author_returns_none(self, catalog: CatalogService, user):
        assert catalog.edit_author(user, "Nobody Known", 1900) is None
        assert catalog.author_count() == 0

    def test_requires_authentication(self, catalog: CatalogService):
        catalog.add_author("Robert Martin", 1952)

        with pytest.raises(AuthenticationRequired):
            catalog.edit_author(None, "Robert Martin", 1958)

        assert catalog.store.find_author_by_name("Robert Martin").born == 1952

    def test_edit_does_not_notify(self, catalog: CatalogService, user, sink):
        catalog.add_author("Robert Martin")
        catalog.edit_author(user, "Robert Martin", 1958)

        assert sink.books == []


def test_normalize_genres_keeps_first_position():
    assert normalize_genres(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
