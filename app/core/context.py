"""
요청/webhook 전달 단위 컨텍스트

asyncio task는 생성 시점의 컨텍스트를 복사하므로, webhook 처리 중 만든
백그라운드 task 로그에도 같은 delivery_id가 남는다.
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
delivery_id_var: ContextVar[str | None] = ContextVar("delivery_id", default=None)


def get_request_id() -> str | None:
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """request_id 설정, 없으면 8자리 hex 생성"""
    if request_id is None:
        request_id = uuid.uuid4().hex[:8]
    request_id_var.set(request_id)
    return request_id


def get_delivery_id() -> str | None:
    return delivery_id_var.get()


def set_delivery_id(delivery_id: str | None) -> None:
    delivery_id_var.set(delivery_id)


@contextmanager
def delivery_context(delivery_id: str | None) -> Iterator[None]:
    """블록 안에서만 delivery_id를 바꾸고 끝나면 이전 값으로 복원"""
    token = delivery_id_var.set(delivery_id)
    try:
        yield
    finally:
        delivery_id_var.reset(token)


def clear_context() -> None:
    request_id_var.set(None)
    delivery_id_var.set(None)
