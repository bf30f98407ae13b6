import logging
import secrets

from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.core.config import Settings
from dragons.core.constants import ROLE_ADMIN
from dragons.core.security import get_password_hash
from dragons.models.user import User

logger = logging.getLogger(__name__)


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """Creates indexes for all collections."""
    logger.info("Creating database indexes...")

    # Users
    await db["users"].create_index("username", unique=True)
    await db["users"].create_index("email", unique=True)
    await db["users"].create_index("role")

    # Teams
    await db["teams"].create_index("members")
    await db["teams"].create_index("mentor_id")
    await db["teams"].create_index("coordinator_id")

    # Tasks
    await db["tasks"].create_index("project_id")

    logger.info("Database indexes created.")


async def init_db(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    await create_indexes(db)

    user_collection = db["users"]

    if await user_collection.count_documents({}) == 0:
        logger.info("No users found. Creating initial admin user.")

        password = secrets.token_urlsafe(16)
        user = User(
            username=settings.INITIAL_ADMIN_USERNAME,
            # Login lowercases the submitted email before the lookup
            email=settings.INITIAL_ADMIN_EMAIL.strip().lower(),
            hashed_password=get_password_hash(password),
            role=ROLE_ADMIN,
        )
        await user_collection.insert_one(user.model_dump(by_alias=True))

        # Credentials go to stdout only, never to the log files
        print("\n" + "=" * 60)
        print("INITIAL ADMIN USER CREATED")
        print("-" * 60)
        print(f"Username: {user.username}")
        print(f"Email:    {user.email}")
        print(f"Password: {password}")
        print("-" * 60)
        print("PLEASE CHANGE THIS PASSWORD IMMEDIATELY AFTER LOGIN!")
        print("This password will not be shown again.")
        print("=" * 60 + "\n")

        logger.info("Initial admin user created. Credentials displayed on stdout.")
    else:
        logger.info("Users already exist. Skipping initial user creation.")
