from enum import Enum

from performance.domain.errors import InvalidArgumentError


class Metric(str, Enum):
    # 랭킹 정렬 기준으로 허용되는 지표(컬럼명과 동일)
    VIEWS = "views"
    LIKES = "likes"
    DISLIKES = "dislikes"
    COMMENTS = "comments"

    @classmethod
    def parse(cls, value: "str | Metric | None") -> "Metric":
        if isinstance(value, Metric):
            return value
        if value is None:
            return cls.VIEWS
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                f"unsupported metric: {value!r} (expected views, likes, dislikes, comments)"
            ) from None
