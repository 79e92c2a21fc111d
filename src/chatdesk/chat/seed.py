"""Demo customers shown when the client starts."""

from datetime import datetime, timedelta

from .models import Message
from .store import ConversationStore

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)

DEMO_CUSTOMERS = [
    ("c1", "王总 (宏达机械)", "101", "老李，上次那个M6的丝锥还有货吗？", HOUR),
    ("c2", "张工 (精密模具)", "202", "滚花轮纹路有点浅，怎么调？", DAY),
    ("c3", "李老板 (五金加工)", "303", "收到货了，质量不错。", 2 * DAY),
]


def create_demo_store(now: datetime | None = None) -> ConversationStore:
    """Create a store with three demo customers, the first one active."""
    now = now or datetime.now()
    store = ConversationStore()

    # add_customer prepends, so insert in reverse to keep display order
    for customer_id, name, seed, text, age in reversed(DEMO_CUSTOMERS):
        store.add_customer(name, customer_id=customer_id, avatar_seed=seed, select=False)
        store.append_message(
            customer_id,
            Message.incoming(text).model_copy(update={"timestamp": now - age}),
        )

    store.select_customer(DEMO_CUSTOMERS[0][0])
    return store
