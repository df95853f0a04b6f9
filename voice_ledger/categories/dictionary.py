"""
Category Dictionary

The compiled-in table of income and expense categories.

DESIGN DECISION: Declaration order matters. The classifier walks each list
in the order below and the first category with a matching keyword wins,
so more specific buckets must come before broader ones.

The table is built once, on first use, and there is no mutation API.
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from voice_ledger.models.finance import Category, TransactionType


# Shown when a stored category id no longer resolves.
FALLBACK_NAME = "Khác"
FALLBACK_ICON = "help-outline"
FALLBACK_COLOR = "#6B7280"


_EXPENSE_TABLE = (
    {
        "id": "food",
        "name": "Thức ăn",
        "icon": "fast-food-outline",
        "color": "#F97316",
        "keywords": (
            "ăn", "bánh", "cơm", "phở", "bún", "mì", "cafe", "cà phê", "trà",
            "uống", "nhậu", "bia", "rượu", "đồ ăn", "thức ăn", "ăn sáng",
            "ăn trưa", "ăn tối", "ăn vặt", "snack", "nước", "sinh tố", "trà sữa",
        ),
    },
    {
        "id": "transport",
        "name": "Di chuyển",
        "icon": "car-outline",
        "color": "#3B82F6",
        "keywords": (
            "xăng", "grab", "taxi", "xe", "gửi xe", "đỗ xe", "bus", "xe buýt",
            "vé xe", "vé tàu", "vé máy bay", "uber", "be", "gojek", "xeom", "xe ôm",
        ),
    },
    {
        "id": "shopping",
        "name": "Mua sắm",
        "icon": "bag-handle-outline",
        "color": "#EC4899",
        "keywords": (
            "mua", "quần", "áo", "giày", "dép", "túi", "đồng hồ", "phụ kiện",
            "mỹ phẩm", "son", "kem", "sữa rửa mặt", "quần áo", "thời trang",
            "shopping",
        ),
    },
    {
        "id": "entertainment",
        "name": "Giải trí",
        "icon": "game-controller-outline",
        "color": "#8B5CF6",
        "keywords": (
            "phim", "game", "chơi", "du lịch", "xem phim", "karaoke", "bar",
            "club", "concert", "show", "netflix", "spotify", "youtube",
            "giải trí", "vui chơi",
        ),
    },
    {
        "id": "bills",
        "name": "Hóa đơn",
        "icon": "receipt-outline",
        "color": "#EF4444",
        "keywords": (
            "điện", "nước", "internet", "wifi", "điện thoại", "tiền nhà",
            "thuê nhà", "phí", "hóa đơn", "tiền điện", "tiền nước", "tiền net",
            "cước", "phí dịch vụ",
        ),
    },
    {
        "id": "health",
        "name": "Sức khỏe",
        "icon": "medical-outline",
        "color": "#10B981",
        "keywords": (
            "thuốc", "bác sĩ", "khám", "bệnh viện", "gym", "tập", "thể dục",
            "yoga", "vitamin", "thực phẩm chức năng", "nha khoa", "mắt kính",
            "sức khỏe",
        ),
    },
    {
        "id": "education",
        "name": "Giáo dục",
        "icon": "school-outline",
        "color": "#6366F1",
        "keywords": (
            "học", "sách", "khóa học", "học phí", "trường", "lớp", "thầy", "cô",
            "gia sư", "udemy", "coursera", "online", "tiếng anh", "ngoại ngữ",
        ),
    },
    {
        "id": "family",
        "name": "Gia đình",
        "icon": "people-outline",
        "color": "#F59E0B",
        "keywords": (
            "gia đình", "bố", "mẹ", "con", "vợ", "chồng", "anh", "chị", "em",
            "ông", "bà", "biếu", "cho", "tặng", "quà",
        ),
    },
    {
        "id": "other_expense",
        "name": "Khác",
        "icon": "ellipsis-horizontal-outline",
        "color": "#6B7280",
        "keywords": (),
    },
)

_INCOME_TABLE = (
    {
        "id": "salary",
        "name": "Lương",
        "icon": "wallet-outline",
        "color": "#10B981",
        "keywords": ("lương", "nhận lương", "lương tháng", "salary"),
    },
    {
        "id": "bonus",
        "name": "Thưởng",
        "icon": "gift-outline",
        "color": "#F59E0B",
        "keywords": ("thưởng", "bonus", "thưởng tết", "thưởng lễ", "thưởng dự án"),
    },
    {
        "id": "investment",
        "name": "Đầu tư",
        "icon": "trending-up-outline",
        "color": "#8B5CF6",
        "keywords": (
            "đầu tư", "lãi", "cổ phiếu", "chứng khoán", "crypto", "bitcoin",
            "thu về", "lợi nhuận",
        ),
    },
    {
        "id": "freelance",
        "name": "Freelance",
        "icon": "laptop-outline",
        "color": "#3B82F6",
        "keywords": ("freelance", "dự án", "job", "việc ngoài", "làm thêm", "part-time"),
    },
    {
        "id": "gift_income",
        "name": "Quà tặng",
        "icon": "heart-outline",
        "color": "#EC4899",
        "keywords": ("được cho", "được tặng", "lì xì", "tiền mừng", "quà"),
    },
    {
        "id": "sell",
        "name": "Bán đồ",
        "icon": "pricetag-outline",
        "color": "#14B8A6",
        "keywords": ("bán", "bán được", "bán đồ", "thanh lý"),
    },
    {
        "id": "other_income",
        "name": "Khác",
        "icon": "ellipsis-horizontal-outline",
        "color": "#6B7280",
        "keywords": (),
    },
)


class CategoryDictionary:
    """
    Read-only view over the compiled-in categories.

    Obtain the shared instance through get_category_dictionary().
    """

    def __init__(
        self,
        expense: tuple[Category, ...],
        income: tuple[Category, ...],
    ):
        self._expense = expense
        self._income = income
        self._by_id: Mapping[str, Category] = MappingProxyType(
            {category.id: category for category in expense + income}
        )

    @property
    def expense(self) -> tuple[Category, ...]:
        return self._expense

    @property
    def income(self) -> tuple[Category, ...]:
        return self._income

    @property
    def all(self) -> tuple[Category, ...]:
        return self._expense + self._income

    def get(self, category_id: str) -> Optional[Category]:
        """Lookup by id; None on a miss."""
        return self._by_id.get(category_id)

    def by_type(self, transaction_type: TransactionType) -> tuple[Category, ...]:
        if transaction_type == TransactionType.INCOME:
            return self._income
        return self._expense

    def fallback(self, transaction_type: TransactionType) -> Category:
        """
        The designated "other" category of a type.

        Falls back to the last category of the list if no id contains "other".
        """
        categories = self.by_type(transaction_type)
        for category in categories:
            if category.is_fallback:
                return category
        return categories[-1]


def _build(table: tuple[dict, ...], transaction_type: TransactionType) -> tuple[Category, ...]:
    return tuple(Category(type=transaction_type, **row) for row in table)


@lru_cache(maxsize=1)
def get_category_dictionary() -> CategoryDictionary:
    """Build the table on first use and share it afterwards."""
    return CategoryDictionary(
        expense=_build(_EXPENSE_TABLE, TransactionType.EXPENSE),
        income=_build(_INCOME_TABLE, TransactionType.INCOME),
    )


def get_category_by_id(category_id: str) -> Optional[Category]:
    return get_category_dictionary().get(category_id)


def get_categories_by_type(transaction_type: TransactionType) -> tuple[Category, ...]:
    return get_category_dictionary().by_type(transaction_type)


def get_fallback_category(transaction_type: TransactionType) -> Category:
    return get_category_dictionary().fallback(transaction_type)


def describe_category(category_id: str) -> tuple[str, str, str]:
    """
    (name, icon, color) for display.

    A miss yields the neutral "help" icon in gray instead of failing.
    """
    category = get_category_by_id(category_id)
    if category is None:
        return FALLBACK_NAME, FALLBACK_ICON, FALLBACK_COLOR
    return category.name, category.icon, category.color
