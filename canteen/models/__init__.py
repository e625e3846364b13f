"""ORM Models — SQLAlchemy declarative records for every stored entity.

Invariants:
    - All models inherit from Base (db/base.py)
    - Orders carry denormalized worker name/employer; workers are joined
      only for the current cost center at report time

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from canteen.models.worker import Worker  # noqa: F401
from canteen.models.company import Company  # noqa: F401
from canteen.models.order import Order  # noqa: F401
from canteen.models.daily_tally import DailyTally  # noqa: F401
from canteen.models.admin_session import AdminSession  # noqa: F401
from canteen.models.setting import Setting  # noqa: F401
