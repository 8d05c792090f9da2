"""
Declared subscriptions.

A `SubscriptionField` ties a client-facing subscription name to a topic, an
argument model, a membership test and a self-exclusion policy. Transports
open subscriptions through `subscribe()` and never touch topics directly.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel, ValidationError

from .events import GROUP_ADDED_TOPIC, MESSAGE_ADDED_TOPIC
from .exceptions import InvalidOperationError
from .filters import (
    group_creator,
    is_own_event,
    message_author,
    message_in_subscribed_groups,
    subscriber_in_group,
)
from .groups import require_membership
from .models import GroupAddedArgs, MessageAddedArgs
from .pubsub import PubSub, Subscription, with_filter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubscriptionField:
    """A subscription clients can open by name."""

    name: str
    topic: str
    args_model: type[BaseModel]
    membership: Callable[[dict[str, Any], Any], bool]
    actor: Callable[[dict[str, Any]], int | None]
    exclude_self: bool = True
    # Raises when the subscriber may not open this subscription with these args
    access: Callable[[Any], None] | None = None

    def predicate(self, payload: dict[str, Any], args: Any) -> bool:
        if not self.membership(payload, args):
            return False
        if self.exclude_self and is_own_event(self.actor(payload), args.userId):
            return False
        return True

    def parse_args(self, variables: Mapping[str, Any] | None) -> BaseModel:
        if variables is None:
            variables = {}
        if not isinstance(variables, Mapping):
            raise InvalidOperationError(
                f"Arguments for subscription {self.name} must be an object"
            )
        try:
            return self.args_model.model_validate(dict(variables))
        except ValidationError as e:
            raise InvalidOperationError(
                f"Invalid arguments for subscription {self.name}: {e}"
            ) from e

    def subscribe(
        self,
        bus: PubSub,
        variables: Mapping[str, Any] | None = None,
        check_access: bool = False,
    ) -> Subscription:
        args = self.parse_args(variables)
        if check_access and self.access is not None:
            self.access(args)
        factory = with_filter(lambda _args: self.topic, self.predicate)
        return factory(bus, args)


def _require_group_membership(args: MessageAddedArgs) -> None:
    require_membership(args.userId, args.groupIds or [])


MESSAGE_ADDED = SubscriptionField(
    name="messageAdded",
    topic=MESSAGE_ADDED_TOPIC,
    args_model=MessageAddedArgs,
    membership=message_in_subscribed_groups,
    actor=message_author,
    access=_require_group_membership,
)

GROUP_ADDED = SubscriptionField(
    name="groupAdded",
    topic=GROUP_ADDED_TOPIC,
    args_model=GroupAddedArgs,
    membership=subscriber_in_group,
    actor=group_creator,
)

SUBSCRIPTION_FIELDS: dict[str, SubscriptionField] = {
    field.name: field for field in (MESSAGE_ADDED, GROUP_ADDED)
}


def get_subscription_field(
    name: str, exclude_self: Mapping[str, bool] | None = None
) -> SubscriptionField:
    """
    Look up a subscription by name, applying per-topic policy overrides.

    Args:
        name: Subscription name, e.g. "messageAdded"
        exclude_self: Topic -> whether the acting user is filtered out

    Raises:
        InvalidOperationError: If no subscription has that name
    """
    field = SUBSCRIPTION_FIELDS.get(name)
    if field is None:
        raise InvalidOperationError(f"Unknown subscription: {name}")
    if exclude_self and field.topic in exclude_self:
        field = replace(field, exclude_self=exclude_self[field.topic])
    return field


def subscribe(
    bus: PubSub,
    name: str,
    variables: Mapping[str, Any] | None = None,
    exclude_self: Mapping[str, bool] | None = None,
    check_access: bool = False,
) -> Subscription:
    """
    Open a filtered subscription by name.

    Args:
        bus: The event bus to register on
        name: Subscription name
        variables: Raw subscription arguments, validated against the field's model
        exclude_self: Per-topic self-exclusion overrides
        check_access: Verify against the store that the subscriber may follow
            what its arguments name (e.g. membership of every group)

    Returns:
        A registered subscription yielding only matching payloads

    Raises:
        InvalidOperationError: For unknown names or invalid arguments
        ForbiddenError: If `check_access` is set and the check fails
    """
    field = get_subscription_field(name, exclude_self)
    subscription = field.subscribe(bus, variables, check_access=check_access)
    logger.info("Opened %s subscription (args=%s)", name, subscription.args)
    return subscription
