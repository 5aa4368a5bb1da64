"""Product management — create, update and delete commands and handler.

Deleting a product also deletes its reviews.
"""

import json

from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.catalogue.category.category import Category
from techmarket.catalogue.product.product import Product
from techmarket.domain import techmarket
from techmarket.reviews.review.review import Review
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


@techmarket.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=100)
    price = Float(required=True)
    description = Text()
    category_id = Identifier()
    attributes = Text()  # JSON object
    stock_count = Integer(default=0)


@techmarket.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=100)
    price = Float()
    description = Text()
    category_id = Identifier()
    attributes = Text()  # JSON object
    stock_count = Integer()


@techmarket.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@techmarket.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        if command.category_id:
            # Raises ObjectNotFoundError for an unknown category
            current_domain.repository_for(Category).get(command.category_id)

        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            category_id=command.category_id,
            attributes=json.loads(command.attributes) if command.attributes else None,
            stock_count=command.stock_count or 0,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        kwargs = {}
        if command.name is not None:
            kwargs["name"] = command.name
        if command.price is not None:
            kwargs["price"] = command.price
        if command.description is not None:
            kwargs["description"] = command.description
        if command.category_id is not None:
            current_domain.repository_for(Category).get(command.category_id)
            kwargs["category_id"] = command.category_id
        if command.attributes is not None:
            kwargs["attributes"] = json.loads(command.attributes)
        if command.stock_count is not None:
            kwargs["stock_count"] = command.stock_count

        product.update_details(**kwargs)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        review_repo = current_domain.repository_for(Review)
        reviews = review_repo.for_product(command.product_id)
        for review in reviews:
            review_repo._dao.delete(review)

        repo._dao.delete(product)

        logger.info(
            "Product deleted",
            product_id=str(command.product_id),
            reviews_deleted=len(reviews),
        )
