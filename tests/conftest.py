"""Shared fixtures: temporary catalog and log databases, services and app."""

import os
import tempfile
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from lawnmower_api.api import create_app
from lawnmower_api.clients import SqliteClient
from lawnmower_api.config import ApiConfig, AppConfig, CatalogConfig, LoggingConfig, LogStoreConfig
from lawnmower_api.services import CatalogSchema, CatalogService, DebugLogService, SqliteLogStore
from lawnmower_api.services.catalog_schema import PRODUCT_FIELDS

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Bosch Rotak 32R",
        "category": "Lawnmower",
        "price": 129.99,
        "image_url": "https://example.com/img/rotak32r.jpg",
        "product_url": "https://example.com/p/rotak32r",
        "description": "Lightweight electric mower for small lawns",
        "brand": "Bosch",
        "power_source": "Electric",
        "drive_type": "Push",
        "cutting_width_cm": 32,
        "has_rear_roller": True,
        "configuration": "Corded",
        "battery_system": None,
        "ideal_for": "Small gardens",
        "best_feature": "Rear roller for stripes",
    },
    {
        "id": 2,
        "name": "Honda HRX 476",
        "category": "Lawnmower",
        "price": 899.0,
        "image_url": "https://example.com/img/hrx476.jpg",
        "product_url": "https://example.com/p/hrx476",
        "description": "Premium petrol mower with Versamow system",
        "brand": "Honda",
        "power_source": "Petrol",
        "drive_type": "Self-propelled",
        "cutting_width_cm": 47,
        "has_rear_roller": True,
        "configuration": "Rotary",
        "battery_system": None,
        "ideal_for": "Large lawns",
        "best_feature": "Mulching",
    },
    {
        "id": 3,
        "name": "Flymo Easi Glide 300",
        "category": "Lawnmower",
        "price": 79.5,
        "image_url": "https://example.com/img/easiglide.jpg",
        "product_url": "https://example.com/p/easiglide",
        "description": "Electric hover mower that glides over grass",
        "brand": "Flymo",
        "power_source": "Electric",
        "drive_type": "Hover",
        "cutting_width_cm": 30,
        "has_rear_roller": False,
        "configuration": "Hover",
        "battery_system": None,
        "ideal_for": "Small uneven lawns",
        "best_feature": "Very light",
    },
    {
        "id": 4,
        "name": "Ryobi 36V Brushless",
        "category": "Lawnmower",
        "price": 349.0,
        "image_url": "https://example.com/img/ryobi36.jpg",
        "product_url": "https://example.com/p/ryobi36",
        "description": "Cordless lawnmower with a brushless motor",
        "brand": "Ryobi",
        "power_source": "Battery",
        "drive_type": "Push",
        "cutting_width_cm": 46,
        "has_rear_roller": False,
        "configuration": "Rotary",
        "battery_system": "MAX POWER 36V",
        "ideal_for": "Medium lawns",
        "best_feature": "Shares batteries with other tools",
    },
    {
        "id": 5,
        "name": "Mountfield Princess 38Li",
        "category": "Lawnmower",
        "price": 299.0,
        "image_url": "https://example.com/img/princess38.jpg",
        "product_url": "https://example.com/p/princess38",
        "description": "Battery powered cylinder mower",
        "brand": "Mountfield",
        "power_source": "Battery",
        "drive_type": "Push",
        "cutting_width_cm": 38,
        "has_rear_roller": True,
        "configuration": "Cylinder",
        "battery_system": "Li-ion 48V",
        "ideal_for": "Striped lawns",
        "best_feature": "Fine finish",
    },
    {
        "id": 6,
        "name": "Worx Landroid M500",
        "category": "Robot Mower",
        "price": 649.0,
        "image_url": "https://example.com/img/landroid.jpg",
        "product_url": "https://example.com/p/landroid",
        "description": "Robot lawn mower for hands-free cutting",
        "brand": "Worx",
        "power_source": "Battery",
        "drive_type": "Robotic",
        "cutting_width_cm": 18,
        "has_rear_roller": False,
        "configuration": "Robotic",
        "battery_system": "PowerShare 20V",
        "ideal_for": "Busy owners",
        "best_feature": "App control",
    },
]


def create_catalog_db(path: str, schema: CatalogSchema, products: List[Dict[str, Any]]) -> None:
    """Create and fill a catalog table laid out according to `schema`."""
    column_types = {
        "id": "INTEGER PRIMARY KEY",
        "price": "REAL",
        "cutting_width_cm": "REAL",
        "has_rear_roller": "INTEGER" if schema.rear_roller_storage == "integer" else "TEXT",
    }
    columns = ", ".join(
        f"{schema.column(field)} {column_types.get(field, 'TEXT')}" for field in PRODUCT_FIELDS
    )
    insert_columns = ", ".join(schema.column(field) for field in PRODUCT_FIELDS)
    placeholders = ", ".join("?" for _ in PRODUCT_FIELDS)

    with SqliteClient(path) as client:
        client.execute_query(f"CREATE TABLE {schema.table_name} ({columns})")
        for product in products:
            values = []
            for field in PRODUCT_FIELDS:
                value = product.get(field)
                if field == "has_rear_roller" and value is not None:
                    if schema.rear_roller_storage == "integer":
                        value = 1 if value else 0
                    else:
                        value = "true" if value else "false"
                values.append(value)
            client.execute_query(
                f"INSERT INTO {schema.table_name} ({insert_columns}) VALUES ({placeholders})",
                values,
            )


def fetch_log_rows(db_path: str, table: str = "debug_logs") -> List[Dict[str, Any]]:
    with SqliteClient(db_path) as client:
        return client.execute_query(
            f"SELECT session_id, user_id, timestamp, log_message, log_level FROM {table} ORDER BY id"
        )


def _temp_db_path():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    return path


@pytest.fixture
def catalog_db_path():
    """Temporary catalog file (snake_case columns, text rear-roller flags)."""
    path = _temp_db_path()
    create_catalog_db(path, CatalogSchema(rear_roller_storage="text"), SAMPLE_PRODUCTS)
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def log_db_path():
    """Create a temporary log database file for testing."""
    path = _temp_db_path()
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def catalog_service(catalog_db_path):
    return CatalogService(catalog_db_path, CatalogSchema(rear_roller_storage="text"))


@pytest.fixture
def log_store(log_db_path):
    return SqliteLogStore(log_db_path)


@pytest.fixture
def debug_log_service(log_store):
    return DebugLogService(log_store)


@pytest.fixture
def app_config(catalog_db_path, log_db_path):
    return AppConfig(
        catalog=CatalogConfig(
            path=catalog_db_path,
            table="Lawnmowers",
            column_style="snake_case",
            rear_roller_storage="text",
        ),
        log_store=LogStoreConfig(backend="sqlite", sqlite_path=log_db_path, table="debug_logs"),
        logging=LoggingConfig(level="WARNING"),
        api=ApiConfig(cors_origins=("*",)),
        postgres=None,
    )


@pytest.fixture
def client(app_config, catalog_service, debug_log_service):
    """TestClient over an app wired to the temporary databases."""
    app = create_app(app_config, catalog_service, debug_log_service)
    with TestClient(app) as test_client:
        yield test_client
