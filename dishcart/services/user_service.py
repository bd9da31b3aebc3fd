from dishcart.domain.entities import USER
from dishcart.domain.errors import NotFound
from dishcart.domain.ports import EntityStore
from dishcart.domain.schemas import UserCreate, UserRead


class UserService:
    def __init__(self, store: EntityStore):
        self.store = store

    def create_user(self, payload: UserCreate) -> UserRead:
        existing = self.store.find_one(USER, {"id": payload.id})
        if existing:
            return UserRead(**existing)

        created = self.store.create(USER, {"id": payload.id, "name": payload.name})
        return UserRead(**created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.store.find_one(USER, {"id": user_id})
        if not user:
            raise NotFound("User not found")
        return UserRead(**user)
