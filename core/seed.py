"""
Deterministic demo data.

Creates a few groups whose members are all friends with each other and have
already exchanged some messages. Seeding writes to the store directly so no
events are published.
"""

import logging
import random
import time

from .models import Group, Message
from .state import groups, messages, next_id
from .users import add_friend, create_user

logger = logging.getLogger(__name__)


GROUPS = 4
USERS_PER_GROUP = 5
MESSAGES_PER_USER = 5
SEED = 123

_WORDS = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua enim ad minim veniam"
).split()


def _sentence(rng: random.Random) -> str:
    words = rng.sample(_WORDS, rng.randint(4, 9))
    return " ".join(words).capitalize() + "."


def seed_demo_data(
    group_count: int = GROUPS,
    users_per_group: int = USERS_PER_GROUP,
    messages_per_user: int = MESSAGES_PER_USER,
) -> list[Group]:
    """
    Populate the store with demo users, groups and messages.

    Returns:
        The created groups
    """
    rng = random.Random(SEED)
    created: list[Group] = []

    for g in range(group_count):
        members = [
            create_user(
                email=f"user{g * users_per_group + u + 1}@chatty.dev",
                username=f"{rng.choice(_WORDS)}_{g * users_per_group + u + 1}",
            )
            for u in range(users_per_group)
        ]
        for i, current in enumerate(members):
            for other in members[i + 1:]:
                add_friend(current.id, other.id)

        group = Group(
            id=next_id("group"),
            name=" ".join(rng.sample(_WORDS, 3)),
            ownerId=members[0].id,
            userIds=[member.id for member in members],
            createdAt=time.time(),
        )
        groups[group.id] = group
        created.append(group)

        for member in members:
            for _ in range(messages_per_user):
                message = Message(
                    id=next_id("message"),
                    userId=member.id,
                    groupId=group.id,
                    text=_sentence(rng),
                    createdAt=time.time(),
                )
                messages[message.id] = message

    logger.info(
        "Seeded %d groups, %d users, %d messages",
        group_count,
        group_count * users_per_group,
        group_count * users_per_group * messages_per_user,
    )
    return created
