"""
Assignment service: registers a participant and draws their recipient.

The draw is one read-modify-write over two collections. It runs inside a
MongoDB multi-document transaction so that the new assignment and the
removal of the drawn name from the pool commit together or not at all.
"""
import logging
import random
from typing import Awaitable, Callable, Optional, TypeVar

from fastapi.concurrency import run_in_threadpool
from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo import ReadPreference
from pymongo.errors import ConnectionFailure, DuplicateKeyError, PyMongoError
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from secret_santa.config import get_settings
from secret_santa.core.errors import (
    AssignmentFailed,
    DuplicateRegistration,
    InvalidCredentials,
    PoolExhausted,
    SantaError,
    StoreUnavailable,
    ValidationError,
)
from secret_santa.core.security import dummy_verify, hash_password, verify_password
from secret_santa.database.databases import santa_db
from secret_santa.models.assignment import Assignment, NamePool, Registrant
from secret_santa.models.person import Person
from secret_santa.schemas.santa import AssignmentResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Redraws without transactions. Each lost draw means a concurrent registrant
# took that candidate out of the pool, so the pool shrinks on every retry.
MAX_DRAW_ATTEMPTS = 20


class CandidateTaken(Exception):
    """The drawn candidate left the pool before our removal."""


def _required(**fields: Optional[str]) -> None:
    missing = [k for k, v in fields.items() if v is None or not v.strip()]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def pick_candidate(candidates: list[Person], rng: random.Random) -> Person:
    """Uniform draw over the eligible candidates."""
    return candidates[rng.randrange(len(candidates))]


class AssignmentService:
    """Service for creating and checking assignments."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        rng: Optional[random.Random] = None,
        use_transactions: Optional[bool] = None,
    ):
        """Initialize with the santa database."""
        self.db = db
        self.assignments = db[santa_db.Collections.ASSIGNMENTS]
        self.pool = db[santa_db.Collections.NAME_POOL]
        self.rng = rng or random.Random()
        if use_transactions is None:
            use_transactions = get_settings().mongo_transactions
        self.use_transactions = use_transactions

    async def create_assignment(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AssignmentResponse:
        """
        Register a participant and assign them a random recipient.

        Args:
            name: Registrant's own name (never drawn for themselves)
            email: Registrant email, unique case-insensitively
            password: Shared secret for check_assignment

        Returns:
            AssignmentResponse for the drawn recipient

        Raises:
            ValidationError: If a field is missing or blank
            DuplicateRegistration: If the email already has an assignment
            PoolExhausted: If nobody is left to draw
            AssignmentFailed: If the transaction aborted or every redraw lost its candidate
            StoreUnavailable: If MongoDB is unreachable
        """
        _required(email=email, password=password, name=name)
        name = name.strip()
        email = normalize_email(email)

        try:
            if await self.assignments.find_one({"registrant.email": email}) is not None:
                raise DuplicateRegistration()
        except ConnectionFailure as e:
            raise StoreUnavailable() from e

        registrant = Registrant(
            name=name,
            email=email,
            password_hash=await run_in_threadpool(hash_password, password),
        )
        orphaned = False

        async def draw(session: Optional[AsyncIOMotorClientSession]) -> Person:
            nonlocal orphaned
            pool_doc = await self.pool.find_one({"_id": santa_db.POOL_ID}, session=session)
            pool = NamePool(**pool_doc) if pool_doc else NamePool()
            if not pool.unassigned:
                raise PoolExhausted()

            candidates = pool.candidates_for(name)
            if not candidates:
                raise PoolExhausted("No suitable names available")

            chosen = pick_candidate(candidates, self.rng)
            assignment = Assignment(registrant=registrant, assigned_person=chosen)
            result = await self.assignments.insert_one(assignment.to_document(), session=session)

            try:
                await self._remove_from_pool(chosen.name, session)
            except (CandidateTaken, PyMongoError):
                # Without a transaction nothing rolls the insert back for us
                if session is None:
                    try:
                        await self.assignments.delete_one({"_id": result.inserted_id})
                    except PyMongoError as cleanup_error:
                        orphaned = True
                        logger.error(
                            f"Could not remove assignment {result.inserted_id} for {email} "
                            f"after an aborted draw: {cleanup_error}"
                        )
                raise
            return chosen

        # with_transaction already retries conflicting draws inside the store
        attempts = 1 if self.use_transactions else MAX_DRAW_ATTEMPTS
        for attempt in range(1, attempts + 1):
            try:
                chosen = await self._run_atomically(draw)
                break
            except SantaError:
                raise
            except DuplicateKeyError as e:
                if await self._is_email_conflict(email, e):
                    raise DuplicateRegistration() from e
                lost = e
            except ConnectionFailure as e:
                logger.error(f"MongoDB unreachable while assigning {email}: {e}")
                raise StoreUnavailable() from e
            except CandidateTaken as e:
                lost = e
            except PyMongoError as e:
                logger.error(f"Assignment transaction aborted for {email}: {e}")
                raise AssignmentFailed() from e

            if orphaned or attempt == attempts:
                logger.error(f"Gave up assigning {email} after {attempt} lost draw(s)")
                raise AssignmentFailed() from lost
            logger.warning(
                f"Candidate taken by a concurrent draw for {email}, redrawing (attempt {attempt})"
            )

        logger.info(f"Assigned a recipient to {email}")
        return AssignmentResponse.from_person(chosen)

    async def check_assignment(
        self,
        email: Optional[str],
        password: Optional[str],
    ) -> AssignmentResponse:
        """
        Return the recipient previously assigned to these credentials.

        Raises:
            ValidationError: If a field is missing or blank
            InvalidCredentials: If the email is unknown or the password wrong
            StoreUnavailable: If MongoDB is unreachable or the read fails
        """
        _required(email=email, password=password)
        email = normalize_email(email)

        try:
            doc = await self.assignments.find_one({"registrant.email": email})
        except ConnectionFailure as e:
            raise StoreUnavailable() from e
        except PyMongoError as e:
            logger.error(f"Assignment lookup failed for {email}: {e}")
            raise StoreUnavailable() from e

        if doc is None:
            await run_in_threadpool(dummy_verify)
            raise InvalidCredentials()

        assignment = Assignment(**{**doc, "_id": str(doc["_id"])})
        if not await run_in_threadpool(
            verify_password, password, assignment.registrant.password_hash
        ):
            raise InvalidCredentials()

        return AssignmentResponse.from_person(assignment.assigned_person)

    async def _remove_from_pool(
        self,
        candidate_name: str,
        session: Optional[AsyncIOMotorClientSession],
    ) -> None:
        """Pull one candidate, failing if a concurrent draw already took them."""
        result = await self.pool.update_one(
            {"_id": santa_db.POOL_ID, "unassigned.name": candidate_name},
            {"$pull": {"unassigned": {"name": candidate_name}}},
            session=session,
        )
        if result.modified_count != 1:
            raise CandidateTaken(candidate_name)

    async def _is_email_conflict(self, email: str, error: DuplicateKeyError) -> bool:
        """Tell a duplicate registration apart from a candidate claimed by another draw."""
        key_pattern = (error.details or {}).get("keyPattern")
        if key_pattern:
            return "registrant.email" in key_pattern
        try:
            return await self.assignments.count_documents({"registrant.email": email}) > 0
        except ConnectionFailure as e:
            raise StoreUnavailable() from e

    async def _run_atomically(
        self,
        callback: Callable[[Optional[AsyncIOMotorClientSession]], Awaitable[T]],
    ) -> T:
        """
        Run `callback` in a transaction, or directly when transactions are off.

        with_transaction retries the whole callback on transient errors
        (write conflicts between concurrent draws) and aborts on anything else.
        """
        if not self.use_transactions:
            return await callback(None)

        async with await self.db.client.start_session() as session:
            return await session.with_transaction(
                callback,
                read_concern=ReadConcern("snapshot"),
                write_concern=WriteConcern("majority"),
                read_preference=ReadPreference.PRIMARY,
            )
