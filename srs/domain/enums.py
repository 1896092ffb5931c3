from enum import Enum, IntEnum

class Rating(IntEnum):
    FORGOT = 1
    UNSURE = 2
    ALMOST = 3
    CONFIDENT = 4

class CardStatus(str, Enum):
    NEW = "new"
    LEARNING = "learning"
    YOUNG = "young"
    MATURE = "mature"

RATING_LABELS = {
    Rating.FORGOT: "Забыл",
    Rating.UNSURE: "Не уверен",
    Rating.ALMOST: "Почти",
    Rating.CONFIDENT: "Уверен",
}

# How far each rating moves the learning step; None resets it to 0.
STEP_DELTA = {
    Rating.FORGOT: None,
    Rating.UNSURE: 0,
    Rating.ALMOST: 1,
    Rating.CONFIDENT: 2,
}
