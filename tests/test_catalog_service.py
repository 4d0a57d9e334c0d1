"""Tests for CatalogService against the memory repositories."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from catalogs.service import CatalogService
from core.errors import ConflictError, InternalError, NotFoundError


class TestCatalogLifecycle:
    @pytest.mark.asyncio
    async def test_create_and_get(self, catalog_service: CatalogService):
        created = await catalog_service.create_catalog("Electronics", "All electronic products")

        fetched = await catalog_service.get_catalog(created["id"])

        assert fetched["name"] == "Electronics"
        assert fetched["description"] == "All electronic products"
        assert fetched["created_at"] is not None

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, catalog_service: CatalogService):
        await catalog_service.create_catalog("Electronics")

        with pytest.raises(ConflictError):
            await catalog_service.create_catalog("Electronics")

    @pytest.mark.asyncio
    async def test_name_match_is_case_sensitive(self, catalog_service: CatalogService):
        await catalog_service.create_catalog("Electronics")

        other = await catalog_service.create_catalog("electronics")

        assert other["name"] == "electronics"

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, catalog_service: CatalogService):
        first = await catalog_service.create_catalog("A")
        second = await catalog_service.create_catalog("B")

        rows = await catalog_service.list_catalogs()

        assert [r["id"] for r in rows] == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, catalog_service: CatalogService):
        with pytest.raises(NotFoundError):
            await catalog_service.get_catalog(999)


class TestCatalogUpdate:
    @pytest.mark.asyncio
    async def test_updates_only_supplied_fields(self, catalog_service: CatalogService):
        created = await catalog_service.create_catalog("Books", "Paper")

        updated = await catalog_service.update_catalog(created["id"], {"description": "Paper and ebooks"})

        assert updated["name"] == "Books"
        assert updated["description"] == "Paper and ebooks"

    @pytest.mark.asyncio
    async def test_renaming_to_own_name_is_allowed(self, catalog_service: CatalogService):
        created = await catalog_service.create_catalog("Books")

        updated = await catalog_service.update_catalog(created["id"], {"name": "Books"})

        assert updated["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_renaming_to_taken_name_conflicts(self, catalog_service: CatalogService):
        await catalog_service.create_catalog("Books")
        games = await catalog_service.create_catalog("Games")

        with pytest.raises(ConflictError):
            await catalog_service.update_catalog(games["id"], {"name": "Books"})

    @pytest.mark.asyncio
    async def test_missing_catalog_raises_not_found(self, catalog_service: CatalogService):
        with pytest.raises(NotFoundError):
            await catalog_service.update_catalog(42, {"name": "Anything"})


class TestCatalogDelete:
    @pytest.mark.asyncio
    async def test_delete_orphans_member_products(self, catalog_service, product_service):
        catalog = await catalog_service.create_catalog("Electronics")
        keep = await catalog_service.create_catalog("Garden")
        phone = await product_service.create_product("Phone", Decimal("999.99"), catalog_id=catalog["id"])
        rake = await product_service.create_product("Rake", Decimal("15.00"), catalog_id=keep["id"])

        await catalog_service.delete_catalog(catalog["id"])

        assert (await product_service.get_product(phone["id"]))["catalog_id"] is None
        assert (await product_service.get_product(rake["id"]))["catalog_id"] == keep["id"]
        remaining = [p for p in await product_service.list_products() if p["catalog_id"] == catalog["id"]]
        assert remaining == []
        with pytest.raises(NotFoundError):
            await catalog_service.get_catalog(catalog["id"])

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, catalog_service: CatalogService):
        with pytest.raises(NotFoundError):
            await catalog_service.delete_catalog(5)


class TestCatalogMembership:
    @pytest.mark.asyncio
    async def test_assign_then_list_includes_product_once(self, catalog_service, product_service):
        catalog = await catalog_service.create_catalog("Electronics")
        product = await product_service.create_product("Phone", Decimal("10"))
        await product_service.create_product("Lamp", Decimal("5"))

        assigned = await catalog_service.assign_product_to_catalog(catalog["id"], product["id"])
        members = await catalog_service.list_products_in_catalog(catalog["id"])

        assert assigned["catalog_id"] == catalog["id"]
        assert [p["id"] for p in members] == [product["id"]]

    @pytest.mark.asyncio
    async def test_unassign_clears_reference(self, catalog_service, product_service):
        catalog = await catalog_service.create_catalog("Electronics")
        product = await product_service.create_product("Phone", Decimal("10"), catalog_id=catalog["id"])

        removed = await catalog_service.unassign_product_from_catalog(catalog["id"], product["id"])

        assert removed["catalog_id"] is None
        assert await catalog_service.list_products_in_catalog(catalog["id"]) == []

    @pytest.mark.asyncio
    async def test_unassign_from_wrong_catalog_is_not_found(self, catalog_service, product_service):
        a = await catalog_service.create_catalog("A")
        b = await catalog_service.create_catalog("B")
        product = await product_service.create_product("Phone", Decimal("10"), catalog_id=a["id"])

        with pytest.raises(NotFoundError, match="does not belong"):
            await catalog_service.unassign_product_from_catalog(b["id"], product["id"])

        assert (await product_service.get_product(product["id"]))["catalog_id"] == a["id"]

    @pytest.mark.asyncio
    async def test_assign_requires_both_entities(self, catalog_service, product_service):
        catalog = await catalog_service.create_catalog("A")
        product = await product_service.create_product("Phone", Decimal("10"))

        with pytest.raises(NotFoundError):
            await catalog_service.assign_product_to_catalog(catalog["id"], 999)
        with pytest.raises(NotFoundError):
            await catalog_service.assign_product_to_catalog(999, product["id"])

    @pytest.mark.asyncio
    async def test_list_products_of_missing_catalog_is_not_found(self, catalog_service):
        with pytest.raises(NotFoundError):
            await catalog_service.list_products_in_catalog(3)


class TestCatalogInternalErrors:
    @pytest.mark.asyncio
    async def test_repository_failure_is_wrapped(self, catalog_repo, product_repo):
        catalog_repo.find_by_name = AsyncMock(side_effect=OSError("connection reset by peer"))
        service = CatalogService(catalog_repo, product_repo)

        with pytest.raises(InternalError) as exc_info:
            await service.create_catalog("Electronics")

        assert "connection reset" not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)

    @pytest.mark.asyncio
    async def test_conflict_from_storage_passes_through(self, catalog_repo, product_repo):
        catalog_repo.create = AsyncMock(side_effect=ConflictError('Catalog with name "X" already exists'))
        service = CatalogService(catalog_repo, product_repo)

        with pytest.raises(ConflictError):
            await service.create_catalog("X")
