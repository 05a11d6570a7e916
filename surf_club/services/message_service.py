"""
Message service - direct messages and conversation aggregation.

A conversation is the unordered pair of users {A, B}. Nothing about it is
stored: the latest message and the unread count are computed from the
``messages`` table on every request.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import and_, case, func, or_
from sqlalchemy.orm import Session, aliased

from surf_club.errors import NotFound
from surf_club.models import Message, User

logger = logging.getLogger(__name__)


class MessageService:
    """Service for direct messaging."""

    @staticmethod
    def unread_count(db: Session, user_id: UUID) -> int:
        """Number of messages addressed to the user that have not been read."""
        return db.query(func.count(Message.id)).filter(
            Message.receiver_id == user_id,
            Message.read_at.is_(None),
        ).scalar() or 0

    @staticmethod
    def list_conversations(db: Session, user_id: UUID) -> List[Dict[str, Any]]:
        """
        One row per counterpart the user has exchanged messages with.

        Messages are partitioned by the ordered pair (min id, max id), so A->B
        and B->A land in the same partition. ``row_number()`` picks the latest
        message of each partition; unread counts come from a separate
        aggregate over messages sent to the user.

        Returns:
            Dicts with other_user_id, other_username, other_avatar_url,
            last_message, last_message_time and unread_count, newest first
        """
        sender_is_lower = Message.sender_id < Message.receiver_id
        pair_low = case((sender_is_lower, Message.sender_id), else_=Message.receiver_id)
        pair_high = case((sender_is_lower, Message.receiver_id), else_=Message.sender_id)
        other_user_id = case((Message.sender_id == user_id, Message.receiver_id), else_=Message.sender_id)

        ranked = (
            db.query(
                other_user_id.label("other_user_id"),
                Message.content.label("last_message"),
                Message.created_at.label("last_message_time"),
                func.row_number().over(
                    partition_by=(pair_low, pair_high),
                    order_by=Message.created_at.desc(),
                ).label("position"),
            )
            .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .subquery()
        )

        unread = (
            db.query(Message.sender_id.label("sender_id"), func.count(Message.id).label("unread_count"))
            .filter(Message.receiver_id == user_id, Message.read_at.is_(None))
            .group_by(Message.sender_id)
            .subquery()
        )

        rows = (
            db.query(
                ranked.c.other_user_id,
                User.username,
                User.avatar_url,
                ranked.c.last_message,
                ranked.c.last_message_time,
                func.coalesce(unread.c.unread_count, 0),
            )
            .join(User, User.id == ranked.c.other_user_id)
            .outerjoin(unread, unread.c.sender_id == ranked.c.other_user_id)
            .filter(ranked.c.position == 1)
            .order_by(ranked.c.last_message_time.desc())
            .all()
        )

        return [
            {
                "other_user_id": other_id,
                "other_username": username,
                "other_avatar_url": avatar_url,
                "last_message": last_message,
                "last_message_time": last_message_time,
                "unread_count": int(unread_count),
            }
            for other_id, username, avatar_url, last_message, last_message_time, unread_count in rows
        ]

    @staticmethod
    def get_thread(db: Session, user_id: UUID, other_user_id: UUID) -> List[Dict[str, Any]]:
        """
        All messages between the two users, oldest first.

        Reading the thread marks every unread message from the other user to
        this user as read. The returned rows show read_at as it was before.
        """
        sender = aliased(User)
        receiver = aliased(User)

        rows = (
            db.query(Message, sender.username, receiver.username)
            .join(sender, sender.id == Message.sender_id)
            .join(receiver, receiver.id == Message.receiver_id)
            .filter(or_(
                and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
                and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
            ))
            .order_by(Message.created_at.asc())
            .all()
        )

        messages = [
            {
                "id": message.id,
                "sender_id": message.sender_id,
                "receiver_id": message.receiver_id,
                "content": message.content,
                "created_at": message.created_at,
                "read_at": message.read_at,
                "sender_username": sender_username,
                "receiver_username": receiver_username,
            }
            for message, sender_username, receiver_username in rows
        ]

        marked = db.query(Message).filter(
            Message.sender_id == other_user_id,
            Message.receiver_id == user_id,
            Message.read_at.is_(None),
        ).update({Message.read_at: datetime.utcnow()}, synchronize_session=False)
        db.commit()

        if marked:
            logger.debug("Marked %d messages read: receiver_id=%s sender_id=%s", marked, user_id, other_user_id)

        return messages

    @staticmethod
    def send(db: Session, sender: User, receiver_id: UUID, content: str) -> Message:
        """
        Send a message.

        Raises:
            NotFound: If the receiver does not exist
        """
        receiver = db.query(User.id).filter(User.id == receiver_id).first()
        if not receiver:
            raise NotFound("Receiver not found")

        message = Message(sender_id=sender.id, receiver_id=receiver_id, content=content)
        db.add(message)
        db.commit()
        db.refresh(message)
        logger.info("Message sent: message_id=%s sender_id=%s receiver_id=%s", message.id, sender.id, receiver_id)

        return message


# Global service instance
message_service = MessageService()
