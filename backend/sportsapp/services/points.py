"""
Point balance changes, done as single UPDATE statements so concurrent
requests cannot overwrite each other's totals.
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from sportsapp.models.post import Post
from sportsapp.models.user import User


async def credit_points(db: AsyncSession, user_id: int, amount: int) -> None:
    await db.execute(
        update(User).where(User.id == user_id).values(points=User.points + amount)
    )


async def debit_points(db: AsyncSession, user_id: int, amount: int) -> bool:
    """Take amount from the balance; False (and no change) when it would go negative"""
    result = await db.execute(
        update(User)
        .where(User.id == user_id, User.points >= amount)
        .values(points=User.points - amount)
    )
    return result.rowcount == 1


async def increment_post_points(db: AsyncSession, post_id: int) -> None:
    await db.execute(
        update(Post).where(Post.id == post_id).values(points=Post.points + 1)
    )
