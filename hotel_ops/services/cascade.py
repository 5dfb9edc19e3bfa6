"""Cascading deletes for rooms and categories.

Children are deleted before their parent and the whole chain is committed as
one transaction. If any step fails the transaction is rolled back and the
error propagates, so a failed delete never leaves orphaned issues behind.

Rows are removed with bulk deletes; callers should read anything they still
need from the parent object before calling in.
"""
import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from hotel_ops.models.issue import Issue, IssueTitle
from hotel_ops.models.room import Room

logger = logging.getLogger(__name__)


def _delete_issues_for_titles(db: Session, title_ids: List[int]) -> int:
    if not title_ids:
        return 0
    return db.query(Issue).filter(Issue.title_id.in_(title_ids)).delete(
        synchronize_session=False
    )


def delete_title_cascade(db: Session, title_id: int) -> int:
    """Delete a category and its issues. Returns the number of issues removed."""
    try:
        issues_deleted = _delete_issues_for_titles(db, [title_id])
        db.query(IssueTitle).filter(IssueTitle.id == title_id).delete(
            synchronize_session=False
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Cascade delete of category %s failed; rolled back", title_id)
        raise
    db.expunge_all()
    return issues_deleted


def delete_room_cascade(db: Session, room_id: int) -> Tuple[int, int]:
    """
    Delete a room, its categories and their issues.
    
    Returns ``(categories_deleted, issues_deleted)``.
    """
    try:
        title_ids = [
            row[0] for row in db.query(IssueTitle.id).filter(IssueTitle.room_id == room_id).all()
        ]
        issues_deleted = _delete_issues_for_titles(db, title_ids)
        titles_deleted = 0
        if title_ids:
            titles_deleted = db.query(IssueTitle).filter(IssueTitle.id.in_(title_ids)).delete(
                synchronize_session=False
            )
        db.query(Room).filter(Room.id == room_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Cascade delete of room %s failed; rolled back", room_id)
        raise
    db.expunge_all()
    return titles_deleted, issues_deleted
