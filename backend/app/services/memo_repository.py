"""
MemoPad Backend — Memo Repository (Facade over the memos table)
=================================================================

What:  A small typed operation set over the `memos` table.
How:   Each method issues one SQLAlchemy statement through the session it
       was constructed with and translates rows into `Memo` entities.
Who:   Instantiated per request by the memo routes (see `get_memo_repository`);
       tests construct it directly with a session bound to SQLite.

Error Policy:
    Every operation logs the original database error and raises a
    StorageError carrying a generic message; driver details never leave
    the server. Two deliberate exceptions:

    - get_memo_by_id returns None when the single-row query matched nothing.
    - count_memos returns 0 on failure. It only feeds the seeding decision.

Transactions:
    The repository flushes but never commits. The request's session
    dependency (`app.database.get_db_session`) owns commit and rollback.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import delete, func, select
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import NotFoundError, StorageError
from app.models.memo import MemoRow
from app.schemas.memo import Memo, MemoForm

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load memos."
LOAD_ONE_FAILED = "Failed to load the memo."
CREATE_FAILED = "Failed to create the memo."
UPDATE_FAILED = "Failed to update the memo."
DELETE_FAILED = "Failed to delete the memo."
SEED_FAILED = "Failed to seed sample data."

# uuid4 never yields the nil UUID, so this predicate matches every row.
# It must stay a valid UUID for the PostgreSQL column type.
_CLEAR_ALL_SENTINEL = "00000000-0000-0000-0000-000000000000"


SAMPLE_MEMOS: List[Dict[str, Any]] = [
    {
        "title": "Project meeting prep",
        "content": (
            "Preparation for next Monday's 10 AM project kickoff meeting:\n\n"
            "- Write the project scope document\n"
            "- Assign roles to each team member\n"
            "- Draft the schedule\n"
            "- List the resources we need"
        ),
        "category": "work",
        "tags": ["meeting", "project", "prep"],
    },
    {
        "title": "Learning what's new in React 18",
        "content": """# What's new in React 18

A summary of the main features added in React 18.

## 🚀 Highlights

### 1. Concurrent Features
- **Automatic batching**: several state updates are processed as one
- **Better Suspense**: smoother experience for data fetching and code splitting

### 2. New Hooks

#### useId
```javascript
import { useId } from 'react';

function Component() {
  const id = useId();
  return <input id={id} />;
}
```

#### useDeferredValue
```javascript
const deferredQuery = useDeferredValue(query);
```

## 📅 Study plan

- [x] Read the official docs
- [ ] Build a small example project
- [ ] Try it in an existing project

> **Note**: focused study planned for this weekend""",
        "category": "study",
        "tags": ["React", "study", "development"],
    },
    {
        "title": "New app idea: habit tracker",
        "content": (
            "An app for managing the habits I want to practice every day:\n\n"
            "Core features:\n"
            "- Register and manage habits\n"
            "- Daily check-in\n"
            "- Progress visualization\n"
            "- Goal reminders\n"
            "- Statistics\n\n"
            "Tech stack: React Native + Supabase\n"
            "Launch target: 3 months from now"
        ),
        "category": "idea",
        "tags": ["app development", "habits", "React Native"],
    },
    {
        "title": "Weekend trip plan",
        "content": (
            "Jeju Island trip this weekend:\n\n"
            "Saturday:\n"
            "- Morning: hike Hallasan\n"
            "- Afternoon: visit Seongsan Ilchulbong\n"
            "- Evening: black pork dinner\n\n"
            "Sunday:\n"
            "- Morning: Udo island tour\n"
            "- Afternoon: shopping and souvenirs\n"
            "- Evening: head to the airport\n\n"
            "Packing: hiking boots, camera, sunscreen"
        ),
        "category": "personal",
        "tags": ["travel", "Jeju", "weekend"],
    },
    {
        "title": "Reading list",
        "content": (
            "Books I want to read this year:\n\n"
            "Development:\n"
            "- Clean Code (Robert C. Martin)\n"
            "- Refactoring, 2nd edition (Martin Fowler)\n"
            "- System Design Interview (Alex Xu)\n\n"
            "Self-improvement:\n"
            "- Atomic Habits (James Clear)\n"
            "- How to Win Friends and Influence People (Dale Carnegie)\n\n"
            "Fiction:\n"
            "- Kim Jiyoung, Born 1982 (Cho Nam-joo)\n"
            "- The Midnight Library (Matt Haig)"
        ),
        "category": "personal",
        "tags": ["reading", "books", "self-improvement"],
    },
    {
        "title": "Performance optimization ideas",
        "content": """# Web application performance optimization 💡

Performance is at the heart of a good user experience.

## 🎨 Frontend

### Images
- **Use WebP**: 25-35% smaller than JPEG/PNG
- **Lazy loading**: load only when entering the viewport
- **Responsive images**: serve sizes that match the screen

### Code
```javascript
// Code splitting example
const LazyComponent = lazy(() => import('./LazyComponent'));

// Bundle analysis
npm run build -- --analyze
```

## ⚡ Backend

| Approach | Impact | Difficulty |
|------|------|-------------|
| Query optimization | High | Medium |
| CDN | High | Low |
| Caching strategy | Very high | High |

## 📊 Monitoring

> **Core Web Vitals**
> - **LCP**: 2.5s or less
> - **FID**: 100ms or less
> - **CLS**: 0.1 or less

### Recommended tools
- **Lighthouse**: performance audits
- **Web Vitals**: real user data
- **Bundle Analyzer**: bundle size analysis""",
        "category": "idea",
        "tags": ["performance", "optimization", "web development"],
    },
]


def is_memo_id(value: str) -> bool:
    """True if value can be bound to the UUID id column."""
    try:
        uuid.UUID(value)
    except (TypeError, ValueError, AttributeError):
        return False
    return True


def to_memo(row: MemoRow) -> Memo:
    """Map a stored row onto the Memo entity."""
    return Memo(
        id=row.id,
        title=row.title,
        content=row.content,
        category=row.category,
        tags=list(row.tags or []),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class MemoRepository:
    """
    CRUD facade over the `memos` table.

    Stateless apart from the injected session; safe to create per request.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_memos(self) -> List[Memo]:
        """All memos, most recently created first. No pagination."""
        try:
            result = await self.session.execute(
                select(MemoRow).order_by(MemoRow.created_at.desc())
            )
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Error fetching memos: %s", str(e), exc_info=True)
            raise StorageError(
                message=LOAD_FAILED,
                context={"error_type": type(e).__name__},
            ) from e

        return [to_memo(row) for row in rows]

    async def get_memo_by_id(self, memo_id: str) -> Optional[Memo]:
        """
        Fetch one memo.

        Returns:
            The memo, or None when no row has this id. Ids that are not
            UUIDs were never issued and also return None.

        Raises:
            StorageError: Any other database failure.
        """
        if not is_memo_id(memo_id):
            return None
        try:
            result = await self.session.execute(
                select(MemoRow).where(MemoRow.id == memo_id)
            )
            row = result.scalar_one()
        except NoResultFound:
            return None
        except SQLAlchemyError as e:
            logger.error("Error fetching memo %s: %s", memo_id, str(e), exc_info=True)
            raise StorageError(
                message=LOAD_ONE_FAILED,
                context={"memo_id": memo_id, "error_type": type(e).__name__},
            ) from e

        return to_memo(row)

    async def create_memo(self, form: MemoForm) -> Memo:
        """Insert a memo and return it with its assigned id and timestamps."""
        row = MemoRow(
            title=form.title,
            content=form.content,
            category=form.category,
            tags=list(form.tags),
        )
        try:
            self.session.add(row)
            await self.session.flush()
            # Read back server-side values (timestamps on PostgreSQL)
            await self.session.refresh(row)
        except SQLAlchemyError as e:
            logger.error("Error creating memo: %s", str(e), exc_info=True)
            raise StorageError(
                message=CREATE_FAILED,
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Memo created: %s", row.id)
        return to_memo(row)

    async def update_memo(self, memo_id: str, form: MemoForm) -> Memo:
        """
        Overwrite title, content, category and tags of an existing memo.

        This is a full replacement, not a patch. `id` and `created_at`
        are left alone. `updated_at` moves forward even when the form
        repeats the stored values.

        Raises:
            NotFoundError: No memo has this id.
            StorageError: Any other database failure.
        """
        if not is_memo_id(memo_id):
            logger.warning("Update requested for malformed memo id %r", memo_id)
            raise NotFoundError(resource="memo", resource_id=memo_id)
        try:
            result = await self.session.execute(
                select(MemoRow).where(MemoRow.id == memo_id)
            )
            row = result.scalar_one()

            row.title = form.title
            row.content = form.content
            row.category = form.category
            row.tags = list(form.tags)
            # Unchanged fields alone would skip the UPDATE entirely
            row.updated_at = datetime.now(timezone.utc)

            await self.session.flush()
            await self.session.refresh(row)
        except NoResultFound:
            logger.warning("Update requested for missing memo %s", memo_id)
            raise NotFoundError(resource="memo", resource_id=memo_id)
        except SQLAlchemyError as e:
            logger.error("Error updating memo %s: %s", memo_id, str(e), exc_info=True)
            raise StorageError(
                message=UPDATE_FAILED,
                context={"memo_id": memo_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Memo updated: %s", memo_id)
        return to_memo(row)

    async def delete_memo(self, memo_id: str) -> None:
        """Delete one memo. Deleting an unknown or malformed id is a no-op."""
        if not is_memo_id(memo_id):
            return
        try:
            await self.session.execute(
                delete(MemoRow)
                .where(MemoRow.id == memo_id)
                .execution_options(synchronize_session="fetch")
            )
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Error deleting memo %s: %s", memo_id, str(e), exc_info=True)
            raise StorageError(
                message=DELETE_FAILED,
                context={"memo_id": memo_id, "error_type": type(e).__name__},
            ) from e

    async def clear_all_memos(self) -> None:
        """Delete every memo."""
        try:
            result = await self.session.execute(
                delete(MemoRow)
                .where(MemoRow.id != _CLEAR_ALL_SENTINEL)
                .execution_options(synchronize_session="fetch")
            )
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Error clearing memos: %s", str(e), exc_info=True)
            raise StorageError(
                message=DELETE_FAILED,
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Cleared all memos (%s rows)", result.rowcount)

    async def count_memos(self) -> int:
        """Number of stored memos, or 0 if the count query fails."""
        try:
            result = await self.session.execute(
                select(func.count()).select_from(MemoRow)
            )
            return result.scalar_one() or 0
        except SQLAlchemyError as e:
            logger.error("Error counting memos: %s", str(e))
            return 0

    async def seed_sample_data(self) -> bool:
        """
        Insert SAMPLE_MEMOS into an empty table.

        Returns:
            True if the sample memos were inserted, False if memos already
            existed.

        The count check and the insert are separate statements. Two
        concurrent callers can both see an empty table and both insert.
        """
        if await self.count_memos() > 0:
            return False

        rows = [
            MemoRow(
                title=sample["title"],
                content=sample["content"],
                category=sample["category"],
                tags=list(sample["tags"]),
            )
            for sample in SAMPLE_MEMOS
        ]
        try:
            self.session.add_all(rows)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Error seeding sample data: %s", str(e), exc_info=True)
            raise StorageError(
                message=SEED_FAILED,
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Seeded %d sample memos", len(rows))
        return True


def get_memo_repository(db: AsyncSession = Depends(get_db_session)) -> MemoRepository:
    """FastAPI dependency: a repository bound to the request's session."""
    return MemoRepository(db)
