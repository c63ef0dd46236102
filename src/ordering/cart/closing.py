"""Session close — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.storefront import current_storefront

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class CloseSession:
    """End a shopper session: forget its checkout and its stored cart."""

    session_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class CloseSessionHandler:
    @handle(CloseSession)
    def close_session(self, command):
        was_open = current_storefront().sessions.end(command.session_id)

        repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = repo.get(command.session_id)
            repo._dao.delete(cart)
        except ObjectNotFoundError:
            pass  # Nothing was ever added

        logger.info("Cart discarded", session_id=command.session_id, had_checkout=was_open)
        return was_open
