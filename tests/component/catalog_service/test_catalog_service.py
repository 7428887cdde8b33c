"""
Catalog Service Component Tests

CatalogService business logic over the in-memory repository and a
temp-directory cover storage.

Usage:
    pytest tests/component/catalog_service/test_catalog_service.py -v
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from microservices.catalog_service.catalog_service import CatalogService
from microservices.catalog_service.models import AlbumCreateRequest, AlbumUpdateRequest
from microservices.catalog_service.protocols import (
    AlbumNotFoundError,
    AlbumValidationError,
    CatalogServiceError,
    CoverUploadError,
)
from tests.component.mocks import FakeUpload
from tests.fixtures import make_album_create_request

pytestmark = [pytest.mark.component, pytest.mark.asyncio]

ORIGIN = "http://catalog.test"


class TestListAlbums:
    """List with and without filters"""

    async def test_lists_seed_albums_in_insertion_order(self, catalog_service):
        albums = await catalog_service.list_albums(ORIGIN)

        assert [a.id for a in albums] == [1, 2, 3]
        assert all(a.cover_url is None for a in albums)

    async def test_band_filter_is_case_insensitive(self, catalog_service):
        albums = await catalog_service.list_albums(ORIGIN, band="metallica")

        assert [a.title for a in albums] == ["Master of Puppets", "Ride the Lightning"]

    async def test_band_and_genre_filters_combine(self, catalog_service):
        albums = await catalog_service.list_albums(ORIGIN, band="a", genre="ROCK")

        assert [a.band for a in albums] == ["AC/DC"]

    async def test_empty_filters_return_everything(self, catalog_service):
        albums = await catalog_service.list_albums(ORIGIN, band="", genre="")

        assert len(albums) == 3

    async def test_repository_failure_becomes_service_error(self):
        repo = MagicMock()
        repo.list_albums = AsyncMock(side_effect=RuntimeError("boom"))
        service = CatalogService(repository=repo)

        with pytest.raises(CatalogServiceError):
            await service.list_albums(ORIGIN)


class TestCoverUrls:
    """coverUrl derivation"""

    async def test_cover_url_uses_request_origin(self, catalog_service):
        created = await catalog_service.create_album(
            AlbumCreateRequest(**make_album_create_request(cover="my cover.png")), ORIGIN + "/"
        )

        assert created.cover_url == "http://catalog.test/covers/my%20cover.png"

    async def test_public_base_url_overrides_origin(self, repository):
        service = CatalogService(repository=repository, public_base_url="https://cdn.example.com/")
        created = await service.create_album(
            AlbumCreateRequest(**make_album_create_request(cover="x.png")), ORIGIN
        )

        assert created.cover_url == "https://cdn.example.com/covers/x.png"


class TestCreateAlbum:
    """Create validation and id allocation"""

    async def test_create_appends_with_next_id(self, catalog_service, repository):
        created = await catalog_service.create_album(
            AlbumCreateRequest(**make_album_create_request()), ORIGIN
        )

        assert created.id == 4
        assert await repository.count_albums() == 4

    async def test_missing_genre_is_rejected(self, catalog_service, repository):
        request = AlbumCreateRequest(**make_album_create_request(genre=None))

        with pytest.raises(AlbumValidationError) as exc_info:
            await catalog_service.create_album(request, ORIGIN)

        assert "genre" in str(exc_info.value)
        assert await repository.count_albums() == 3

    async def test_blank_band_counts_as_missing(self, catalog_service):
        request = AlbumCreateRequest(**make_album_create_request(band="x"))
        request.band = "   "

        with pytest.raises(AlbumValidationError):
            await catalog_service.create_album(request, ORIGIN)

    async def test_blank_cover_is_stored_as_null(self, catalog_service):
        created = await catalog_service.create_album(
            AlbumCreateRequest(**make_album_create_request(cover="")), ORIGIN
        )

        assert created.cover is None
        assert created.cover_url is None

    async def test_zero_year_counts_as_missing(self, catalog_service, repository):
        with pytest.raises(AlbumValidationError):
            await catalog_service.create_album(
                AlbumCreateRequest(**make_album_create_request(year=0)), ORIGIN
            )

        assert await repository.count_albums() == 3

    async def test_year_is_stored_as_received(self, catalog_service):
        created = await catalog_service.create_album(
            AlbumCreateRequest(**make_album_create_request(year="1986")), ORIGIN
        )

        assert created.year == "1986"

    async def test_ids_are_not_reused_after_delete(self, catalog_service):
        first = await catalog_service.create_album(
            AlbumCreateRequest(**make_album_create_request()), ORIGIN
        )
        await catalog_service.delete_album(first.id)
        second = await catalog_service.create_album(
            AlbumCreateRequest(**make_album_create_request()), ORIGIN
        )

        assert second.id == first.id + 1
        ids = [a.id for a in await catalog_service.list_albums(ORIGIN)]
        assert len(ids) == len(set(ids))


class TestUpdateAlbum:
    """Partial updates"""

    async def test_title_only_update_keeps_other_fields(self, catalog_service):
        before = await catalog_service.get_album(1, ORIGIN)
        updated = await catalog_service.update_album(1, AlbumUpdateRequest(title="Renamed"), ORIGIN)

        assert updated.title == "Renamed"
        assert (updated.band, updated.year, updated.genre, updated.cover) == (
            before.band, before.year, before.genre, before.cover
        )

    async def test_blank_fields_are_ignored(self, catalog_service):
        updated = await catalog_service.update_album(
            2, AlbumUpdateRequest(band="", title=None, genre="  "), ORIGIN
        )

        assert updated.band == "Metallica"
        assert updated.title == "Ride the Lightning"
        assert updated.genre == "Thrash Metal"

    async def test_cover_can_be_set_and_cleared(self, catalog_service):
        with_cover = await catalog_service.update_album(3, AlbumUpdateRequest(cover="bib.jpg"), ORIGIN)
        assert with_cover.cover_url == f"{ORIGIN}/covers/bib.jpg"

        cleared = await catalog_service.update_album(3, AlbumUpdateRequest(cover=""), ORIGIN)
        assert cleared.cover is None
        assert cleared.cover_url is None

    async def test_zero_year_is_ignored_on_update(self, catalog_service):
        updated = await catalog_service.update_album(1, AlbumUpdateRequest(year=0), ORIGIN)

        assert updated.year == 1986

    async def test_omitted_cover_is_untouched(self, catalog_service):
        await catalog_service.update_album(3, AlbumUpdateRequest(cover="bib.jpg"), ORIGIN)
        updated = await catalog_service.update_album(3, AlbumUpdateRequest(year=1981), ORIGIN)

        assert updated.cover == "bib.jpg"
        assert updated.year == 1981

    async def test_unknown_album_raises_not_found(self, catalog_service):
        with pytest.raises(AlbumNotFoundError):
            await catalog_service.update_album(99, AlbumUpdateRequest(title="x"), ORIGIN)


class TestGetAndDelete:
    """Get and delete"""

    async def test_get_unknown_album_raises_not_found(self, catalog_service):
        with pytest.raises(AlbumNotFoundError):
            await catalog_service.get_album(42, ORIGIN)

    async def test_delete_returns_message(self, catalog_service, repository):
        result = await catalog_service.delete_album(2)

        assert "2" in result.message
        assert await repository.count_albums() == 2

    async def test_delete_unknown_album_leaves_collection(self, catalog_service, repository):
        with pytest.raises(AlbumNotFoundError):
            await catalog_service.delete_album(99)

        assert await repository.count_albums() == 3


class TestUploadCover:
    """Cover uploads through the service"""

    async def test_upload_returns_filename_and_url(self, catalog_service, covers_dir, cover_bytes):
        result = await catalog_service.upload_cover(FakeUpload("front cover.png", cover_bytes), ORIGIN)

        assert result.filename.endswith("_front_cover.png")
        assert result.cover_url == f"{ORIGIN}/covers/{result.filename}"
        assert (covers_dir / result.filename).read_bytes() == cover_bytes

    async def test_missing_file_is_rejected(self, catalog_service):
        with pytest.raises(CoverUploadError):
            await catalog_service.upload_cover(None, ORIGIN)

    async def test_upload_without_storage_is_a_service_error(self, repository):
        service = CatalogService(repository=repository)

        with pytest.raises(CatalogServiceError):
            await service.upload_cover(FakeUpload("a.png", b"x"), ORIGIN)
