"""Order status changes: command and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Actor, Order


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    note = Text()
    actor = String(default=Actor.CUSTOMER.value, max_length=20)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_customer(command.customer_id, command.order_id)
        order.update_status(command.status, note=command.note, actor=command.actor)
        repo.add(order)
        return order.status
