"""Shopper use cases (create, list, lookup, full-replace update, delete)."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shopper_api.db.models import ShopperRecord
from shopper_api.repositories.sql_repository import SQLRepository
from shopper_api.schemas import Shopper, ShopperIn

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

# Fields a client may change after creation
MUTABLE_FIELDS = ("full_name", "email", "street", "city", "state", "zip_code")


class ShopperError(Exception):
    """Base exception for shopper workflow."""


class InvalidShopperError(ShopperError):
    """Raised when a payload does not satisfy the record rules."""


class ShopperNotFoundError(ShopperError):
    """Raised when no shopper matches the requested username."""


class ShopperAlreadyExistsError(ShopperError):
    """Raised when creating a shopper whose username is taken."""


class ShopperStorageError(ShopperError):
    """Raised when the database call itself fails."""


class ShopperService:
    """Translates shopper operations into repository calls."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def _today(self) -> str:
        return datetime.now().strftime(DATE_FORMAT)

    def create(self, payload: ShopperIn) -> Shopper:
        # kept as sent; path lookups use the same value
        username = payload.username
        if not username.strip():
            raise InvalidShopperError("username is required")
        fields = {name: getattr(payload, name) for name in MUTABLE_FIELDS}
        try:
            if self.repository.get_shopper(username) is not None:
                raise ShopperAlreadyExistsError(f"Shopper {username} already exists")
            entity = self.repository.create_shopper(
                username=username, date_joined=self._today(), **fields
            )
        except IntegrityError as exc:
            # lost a race against a concurrent insert of the same key
            raise ShopperAlreadyExistsError(f"Shopper {username} already exists") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to create shopper", extra={"username": username})
            raise ShopperStorageError("failed to create shopper") from exc
        logger.info("Shopper created", extra={"username": username})
        return Shopper.model_validate(entity)

    def list_all(self) -> list[Shopper]:
        try:
            entities = self.repository.list_shoppers()
        except SQLAlchemyError as exc:
            logger.exception("Failed to list shoppers")
            raise ShopperStorageError("could not fetch shoppers") from exc
        return [Shopper.model_validate(entity) for entity in entities]

    def _find(self, username: str) -> ShopperRecord:
        try:
            entity = self.repository.get_shopper(username)
        except SQLAlchemyError as exc:
            logger.exception("Failed to look up shopper", extra={"username": username})
            raise ShopperStorageError("could not fetch shopper") from exc
        if entity is None:
            raise ShopperNotFoundError(f"Shopper {username} not found")
        return entity

    def get(self, username: str) -> Shopper:
        return Shopper.model_validate(self._find(username))

    def update(self, username: str, payload: ShopperIn) -> Shopper:
        """Overwrite every mutable field; username and dateJoined are kept."""
        entity = self._find(username)
        for name in MUTABLE_FIELDS:
            setattr(entity, name, getattr(payload, name))
        try:
            saved = self.repository.save_shopper(entity)
        except SQLAlchemyError as exc:
            logger.exception("Failed to update shopper", extra={"username": username})
            raise ShopperStorageError("failed to update shopper") from exc
        logger.info("Shopper updated", extra={"username": username})
        return Shopper.model_validate(saved)

    def delete(self, username: str) -> None:
        self._find(username)
        try:
            removed = self.repository.delete_shopper(username)
        except SQLAlchemyError as exc:
            logger.exception("Failed to delete shopper", extra={"username": username})
            raise ShopperStorageError("failed to delete shopper") from exc
        if not removed:
            raise ShopperNotFoundError(f"Shopper {username} not found")
        logger.info("Shopper deleted", extra={"username": username})
