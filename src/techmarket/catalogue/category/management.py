"""Category management — create, update and delete commands and handler."""

from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.catalogue.category.category import Category
from techmarket.domain import techmarket
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


@techmarket.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=50)
    description = Text()


@techmarket.command(part_of="Category")
class UpdateCategory:
    category_id = Identifier(required=True)
    name = String(max_length=50)
    description = Text()


@techmarket.command(part_of="Category")
class DeleteCategory:
    category_id = Identifier(required=True)


@techmarket.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_name(command.name) is not None:
            raise ValidationError({"name": ["Category with this name already exists"]})

        category = Category.create(name=command.name, description=command.description)
        repo.add(category)

        logger.info("Category created", category_id=str(category.id), name=category.name)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        kwargs = {}
        if command.name is not None:
            existing = repo.find_by_name(command.name)
            if existing is not None and str(existing.id) != str(category.id):
                raise ValidationError({"name": ["Category with this name already exists"]})
            kwargs["name"] = command.name
        if command.description is not None:
            kwargs["description"] = command.description

        category.update_details(**kwargs)
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)

        logger.info("Category deleted", category_id=str(command.category_id))
