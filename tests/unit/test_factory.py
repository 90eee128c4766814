"""Tests for create() and entity type detection."""

from __future__ import annotations

import logging
from typing import Any
from unittest import mock

import pytest

from stac_entities import (
    Catalog,
    Collection,
    CollectionCollection,
    Item,
    ItemCollection,
    create,
)
from stac_entities.errors import InvalidDataError
from stac_entities.factory import detect_entity_class


class TestDetectEntityClass:
    """Tests for detect_entity_class()."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ({"type": "Feature"}, Item),
            ({"type": "FeatureCollection", "features": []}, ItemCollection),
            ({"type": "Collection"}, Collection),
            ({"extent": {}, "license": "MIT"}, Collection),
            ({"type": "Catalog", "extent": {}, "license": "MIT"}, Collection),
            ({"collections": []}, CollectionCollection),
            ({"type": "Catalog", "collections": []}, Catalog),
            ({"extent": {}}, Catalog),
            ({"type": "Catalog"}, Catalog),
            ({}, Catalog),
        ],
    )
    def test_discrimination(self, data: dict[str, Any], expected: type) -> None:
        assert detect_entity_class(data) is expected


class TestCreate:
    """Tests for create()."""

    @pytest.mark.unit
    def test_fixtures(
        self,
        item_data: dict[str, Any],
        collection_data: dict[str, Any],
        catalog_data: dict[str, Any],
        item_collection_data: dict[str, Any],
        collection_collection_data: dict[str, Any],
    ) -> None:
        assert isinstance(create(item_data), Item)
        assert isinstance(create(collection_data), Collection)
        assert isinstance(create(catalog_data), Catalog)
        assert isinstance(create(item_collection_data), ItemCollection)
        assert isinstance(create(collection_collection_data), CollectionCollection)

    @pytest.mark.unit
    def test_round_trip(self, collection_data: dict[str, Any]) -> None:
        assert create(collection_data).to_dict() == collection_data

    @pytest.mark.unit
    def test_absolute_url(self) -> None:
        catalog = create({"type": "Catalog", "id": "c"}, absolute_url="https://example.com/c.json")

        assert catalog.get_absolute_url() == "https://example.com/c.json"

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [None, [], "{}", 1])
    def test_non_mappings_raise(self, data: object) -> None:
        with pytest.raises(InvalidDataError):
            create(data)

    @pytest.mark.unit
    def test_no_migration_by_default(self, item_data: dict[str, Any]) -> None:
        with mock.patch("stac_entities.factory.migrate_document") as migrate:
            create(item_data)

        migrate.assert_not_called()

    @pytest.mark.unit
    def test_migration_on_request(self, item_data: dict[str, Any]) -> None:
        with mock.patch(
            "stac_entities.factory.migrate_document", return_value=item_data
        ) as migrate:
            create(item_data, migrate=True, update_version_number=True)

        migrate.assert_called_once_with(item_data, True)

    @pytest.mark.unit
    def test_migration_from_setting(
        self, item_data: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("STAC_ENTITIES_MIGRATE", "true")

        with mock.patch(
            "stac_entities.factory.migrate_document", return_value=item_data
        ) as migrate:
            create(item_data)
            create(item_data, migrate=False)

        migrate.assert_called_once()

    @pytest.mark.unit
    def test_logs_detected_type(
        self, item_data: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="stac_entities.factory"):
            create(item_data)

        assert "Creating Item" in caplog.text
