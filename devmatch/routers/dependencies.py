# dependencies.py
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from devmatch.database import get_db
from devmatch.models.user import User
from devmatch.utils.jwt_handler import credentials_error, user_id_from_token


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    user = db.get(User, user_id_from_token(token))
    if user is None:
        # Token outlived its account.
        raise credentials_error("User no longer exists")
    return user
