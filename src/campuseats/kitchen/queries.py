"""Kitchen views: the live order queue and the end-of-day sales report."""

from collections import defaultdict
from datetime import date, datetime, timedelta

from protean.utils.globals import current_domain

from campuseats.errors import InputInvalid
from campuseats.menu.product import Product
from campuseats.order.order import ACTIVE_STATES, Order, OrderStatus
from campuseats.order.queries import order_view
from campuseats.utils import money


def get_pending_orders() -> list[dict]:
    """Orders the kitchen still has to work on, oldest first."""
    orders = (
        current_domain.repository_for(Order)
        ._dao.query.filter(status__in=[s.value for s in ACTIVE_STATES])
        .all()
        .items
    )
    return [order_view(o) for o in sorted(orders, key=lambda o: o.created_at)]


def _completed_orders_on(day: date) -> list[Order]:
    start = datetime.combine(day, datetime.min.time())
    end = start + timedelta(days=1)
    completed = current_domain.repository_for(Order)._dao.query.filter(status=OrderStatus.COMPLETED.value).all().items
    return [o for o in completed if start <= o.created_at < end]


def get_daily_inventory_report(report_date: date | None = None) -> dict:
    """Per-product sales for the Completed orders placed on ``report_date``.

    Every menu item is listed, including ones that sold nothing, plus any
    product that sold that day but has since left the menu. Items are sorted
    by quantity sold, best sellers first.
    """
    today = date.today()
    report_date = report_date or today
    if report_date > today:
        raise InputInvalid({"report_date": ["Report date cannot be in the future"]})

    orders = _completed_orders_on(report_date)

    quantity = defaultdict(int)
    revenue = defaultdict(list)
    line_count = defaultdict(int)
    names = {}
    for order in orders:
        for line in order.lines:
            key = str(line.product_id)
            quantity[key] += line.quantity
            revenue[key].append(line.subtotal)
            line_count[key] += 1
            names.setdefault(key, line.product_name)

    products = {str(p.id): p for p in current_domain.repository_for(Product)._dao.query.all().items}

    items = []
    for product_id in list(products) + [k for k in names if k not in products]:
        product = products.get(product_id)
        product_revenue = money.total(revenue[product_id])
        count = line_count[product_id]
        items.append(
            {
                "product_id": product_id,
                "product_name": product.name if product else names[product_id],
                "category": product.category if product else None,
                "quantity_sold": quantity[product_id],
                "revenue": product_revenue,
                "order_count": count,
                "average_order_value": money.quantize(product_revenue / count) if count else 0.0,
            }
        )
    items.sort(key=lambda item: item["quantity_sold"], reverse=True)

    return {
        "report_date": report_date.isoformat(),
        "items": items,
        "total_revenue": money.total(o.total_amount for o in orders),
        "total_orders_processed": len(orders),
        "total_items_sold": sum(item["quantity_sold"] for item in items),
    }
