import logging
import uuid
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.exceptions import ConflictError, DatabaseError, NotFoundError
from skillbridge.models.booking import Booking
from skillbridge.models.category import Category
from skillbridge.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    """Subject categories referenced by bookings"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_categories(self) -> List[Category]:
        result = await self.db.execute(select(Category).order_by(Category.name.asc()))
        return list(result.scalars().all())

    async def get_category(self, category_id: uuid.UUID) -> Category:
        category = await self.db.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def create_category(self, request: CategoryCreate) -> Category:
        if await self._find_by_name(request.name) is not None:
            raise ConflictError("Category already exists")

        category = Category(name=request.name, description=request.description)
        await self._commit(category, "create")
        logger.info(f"Category {category.id} '{category.name}' created")
        return category

    async def update_category(self, category_id: uuid.UUID, request: CategoryUpdate) -> Category:
        category = await self.get_category(category_id)
        updates = request.model_dump(exclude_unset=True)

        name = updates.get("name")
        if name and name != category.name:
            if await self._find_by_name(name) is not None:
                raise ConflictError("Category name already exists")
            category.name = name

        if "description" in updates:
            category.description = updates["description"]

        await self._commit(category, "update")
        logger.info(f"Category {category.id} updated")
        return category

    async def delete_category(self, category_id: uuid.UUID) -> None:
        category = await self.get_category(category_id)

        in_use = await self.db.scalar(select(func.count(Booking.id)).where(Booking.category_id == category.id))
        if in_use:
            raise ConflictError("Category is referenced by existing bookings")

        try:
            await self.db.delete(category)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to delete category {category_id}: {e}", exc_info=True)
            raise DatabaseError("Failed to delete category")

        logger.info(f"Category {category_id} deleted")

    async def _find_by_name(self, name: str) -> Optional[Category]:
        result = await self.db.execute(select(Category).where(Category.name == name))
        return result.scalar_one_or_none()

    async def _commit(self, category: Category, action: str) -> None:
        try:
            self.db.add(category)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Category already exists")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to {action} category: {e}", exc_info=True)
            raise DatabaseError(f"Failed to {action} category")
