from sqlalchemy.orm import Session

from app.users.models import User


def create_user(db: Session, name: str, email: str, password_hash: str):
    new_user = User(
        name=name,
        email=email,
        password_hash=password_hash,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()
