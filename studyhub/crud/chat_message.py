from sqlalchemy.orm import Session
from studyhub.models import ChatMessage
from studyhub.schemas import ChatMessageCreate
from typing import List

def create_chat_message(db: Session, message: ChatMessageCreate) -> ChatMessage:
    """Store one chat turn"""
    db_message = ChatMessage(**message.model_dump())
    db.add(db_message)
    db.commit()
    db.refresh(db_message)
    return db_message

def get_chat_messages_by_user(db: Session, user_id: int) -> List[ChatMessage]:
    """Get the conversation for a user, oldest first"""
    return db.query(ChatMessage).filter(
        ChatMessage.user_id == user_id
    ).order_by(ChatMessage.created_at, ChatMessage.id).all()
