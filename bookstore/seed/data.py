"""Sample documents inserted by the seed planner on an empty store.

Products reference catalogs by ``code``; orders, invoices and reviews are
derived from the inserted documents at seed time, so only their shape is
described here.
"""

from datetime import UTC, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

CATALOGS: list[dict[str, Any]] = [
    {"code": "FIC", "name": "Tiểu thuyết"},
    {"code": "EDU", "name": "Giáo dục"},
    {"code": "KID", "name": "Thiếu nhi"},
]

# ---------------------------------------------------------------------------
# Products: prices in VND, ``catalog`` is a code from CATALOGS
# ---------------------------------------------------------------------------

PRODUCTS: list[dict[str, Any]] = [
    {
        "isbn": 9786041234567,
        "title": "Dế Mèn Phiêu Lưu Ký",
        "publisher": "NXB Kim Đồng",
        "author": "Tô Hoài",
        "page_count": 200,
        "weight": "250g",
        "price": 60000,
        "description": "Tác phẩm kinh điển thiếu nhi Việt Nam",
        "image_url": "/images/de-men-phieu-luu-ky.jpg",
        "catalog": "KID",
        "sold_count": 0,
        "stock": 100,
    },
    {
        "isbn": 9786049876543,
        "title": "Tuổi Trẻ Đáng Giá Bao Nhiêu",
        "publisher": "NXB Trẻ",
        "author": "Rosie Nguyễn",
        "page_count": 280,
        "weight": "300g",
        "price": 90000,
        "description": "Sách kỹ năng sống dành cho người trẻ",
        "image_url": "/images/tuoi-tre-dang-gia-bao-nhieu.jpg",
        "catalog": "EDU",
        "sold_count": 0,
        "stock": 80,
    },
    {
        "isbn": 9786049999999,
        "title": "Nhà Giả Kim",
        "publisher": "NXB Hội Nhà Văn",
        "author": "Paulo Coelho",
        "page_count": 220,
        "weight": "260g",
        "price": 85000,
        "description": "Tiểu thuyết truyền cảm hứng nổi tiếng thế giới",
        "image_url": "/images/nha-gia-kim.jpg",
        "catalog": "FIC",
        "sold_count": 0,
        "stock": 60,
    },
]

# ---------------------------------------------------------------------------
# Users: ``password_hash`` is filled in by the planner
# ---------------------------------------------------------------------------

USERS: list[dict[str, Any]] = [
    {
        "full_name": "Admin Tim Sach Nha Be",
        "email": "admin@timsachnhabe.com",
        "phone_number": "0900000001",
        "address": "Nhà Bè, TP. Hồ Chí Minh",
        "role": "admin",
    },
    {
        "full_name": "Người Dùng 1",
        "email": "user1@timsachnhabe.com",
        "phone_number": "0900000002",
        "address": "Quận 1, TP. Hồ Chí Minh",
        "role": "user",
    },
    {
        "full_name": "Người Dùng 2",
        "email": "user2@timsachnhabe.com",
        "phone_number": "0900000003",
        "address": "Quận 7, TP. Hồ Chí Minh",
        "role": "user",
    },
]

# ---------------------------------------------------------------------------
# Orders: one entry per placer, lines as (product index, quantity)
# ---------------------------------------------------------------------------

ORDER_PLAN: list[dict[str, Any]] = [
    {
        "lines": [(0, 1), (1, 2)],
        "payment_method": "COD",
        "status": "pending",
    },
    {
        "lines": [(2, 1)],
        "payment_method": "VNPAY",
        "status": "completed",
    },
]

# Flat discount applied to the first seeded order's invoice only.
FIRST_INVOICE_DISCOUNT = 10000

# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------

COUPONS: list[dict[str, Any]] = [
    {
        "code": "WELCOME10",
        "name": "Giảm 10% cho đơn đầu tiên",
        "type": "percent",
        "amount": 10,
        "start_date": datetime(2025, 1, 1, tzinfo=UTC),
        "end_date": datetime(2025, 12, 31, 23, 59, 59, tzinfo=UTC),
        "description": "Áp dụng cho tất cả khách hàng mới",
    },
    {
        "code": "FREESHIP",
        "name": "Miễn phí vận chuyển",
        "type": "shipping",
        "amount": 0,
        "start_date": datetime(2025, 1, 1, tzinfo=UTC),
        "end_date": datetime(2025, 6, 30, 23, 59, 59, tzinfo=UTC),
        "description": "Miễn phí vận chuyển cho đơn từ 200k",
    },
]

# ---------------------------------------------------------------------------
# Reviews: ``product`` is an index into PRODUCTS, resolved to its ISBN
# ---------------------------------------------------------------------------

REVIEWS: list[dict[str, Any]] = [
    {"product": 0, "rating": 5, "comment": "Sách rất hay, đáng đọc"},
    {"product": 1, "rating": 4, "comment": "Nội dung hữu ích cho người trẻ"},
]
