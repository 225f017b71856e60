# Models package
from app.models.box import BoxRow
from app.models.good import GoodRow
