# refreshments/services/session_service.py
import logging
import threading
from datetime import date

from refreshments.core.errors import EmptyCartError, NotFoundError, StateError
from refreshments.schemas.catalog import CatalogSummary, ItemRead
from refreshments.schemas.purchase import PurchaseRead
from refreshments.schemas.report import DailyReport
from refreshments.schemas.session import (
    Adding,
    Browsing,
    CheckoutHidden,
    CheckoutShown,
    CheckoutSubmitting,
    Editing,
    ItemDraft,
    SessionView,
    Tab,
)
from refreshments.services.cart_service import Cart
from refreshments.services.catalog_service import CatalogService
from refreshments.services.purchase_service import PurchaseRecorder
from refreshments.services.report_service import ReportService

logger = logging.getLogger(__name__)


def _price_text(price: float) -> str:
    return str(int(price)) if price.is_integer() else str(price)


class CounterSession:
    """
    The counter screen: owns the catalog list, purchase list, cart and the
    tab / form / checkout-modal state.

    Responsibilities:
      - the only place the shared catalog and purchase lists change, and
        only after the store call succeeded
      - enforce screen-state transitions (StateError otherwise)
      - guard checkout so one cart is never submitted twice

    All methods take the session lock; confirm_checkout releases it while
    the store call is in flight and relies on the Submitting state instead.
    """

    def __init__(
        self,
        catalog: CatalogService,
        recorder: PurchaseRecorder,
        reports: ReportService,
    ):
        self.catalog = catalog
        self.recorder = recorder
        self.reports = reports

        self._lock = threading.RLock()
        self.cart = Cart()
        self.tab: Tab = "purchase"
        self.manage: Browsing | Adding | Editing = Browsing()
        self.checkout: CheckoutHidden | CheckoutShown | CheckoutSubmitting = CheckoutHidden()
        self.selected_date: date = reports.today()

        self._items: list[ItemRead] = []
        self._purchases: list[PurchaseRead] = []

    def load(self) -> None:
        """
        Pull the catalog and purchase history from the stores.
        """
        items = self.catalog.list_items()
        purchases = self.recorder.list_purchases()
        with self._lock:
            self._items = items
            self._purchases = purchases
        logger.info("Loaded %d items and %d purchases", len(items), len(purchases))

    # ----- Read side -----

    @property
    def items(self) -> list[ItemRead]:
        with self._lock:
            return list(self._items)

    @property
    def purchases(self) -> list[PurchaseRead]:
        with self._lock:
            return list(self._purchases)

    def view(self) -> SessionView:
        with self._lock:
            return SessionView(
                tab=self.tab,
                manage=self.manage,
                checkout=self.checkout,
                selected_date=self.selected_date,
                cart=self.cart.summary(),
            )

    def catalog_summary(self) -> CatalogSummary:
        return self.catalog.summarize(self.items)

    def _find_item(self, item_id: int) -> ItemRead:
        for item in self._items:
            if item.id == item_id:
                return item
        raise NotFoundError(item_id)

    # ----- Tabs -----

    def select_tab(self, tab: Tab) -> None:
        with self._lock:
            if not isinstance(self.checkout, CheckoutHidden):
                raise StateError("Finish or cancel the checkout first")
            self.tab = tab

    # ----- Cart -----

    def _ensure_cart_editable(self) -> None:
        if not isinstance(self.checkout, CheckoutHidden):
            raise StateError("The cart is locked while checkout is open")

    def add_to_cart(self, item_id: int) -> None:
        with self._lock:
            self._ensure_cart_editable()
            self.cart.add(self._find_item(item_id))

    def set_cart_quantity(self, item_id: int, quantity: int) -> None:
        with self._lock:
            self._ensure_cart_editable()
            self.cart.set_quantity(item_id, quantity)

    def remove_from_cart(self, item_id: int) -> None:
        with self._lock:
            self._ensure_cart_editable()
            self.cart.remove(item_id)

    def clear_cart(self) -> None:
        with self._lock:
            self._ensure_cart_editable()
            self.cart.clear()

    # ----- Checkout -----

    def request_checkout(self) -> CheckoutShown:
        with self._lock:
            if isinstance(self.checkout, CheckoutSubmitting):
                raise StateError("A purchase is already being recorded")
            if self.cart.is_empty():
                raise EmptyCartError()
            self.checkout = CheckoutShown(total=self.cart.total())
            return self.checkout

    def cancel_checkout(self) -> None:
        with self._lock:
            if isinstance(self.checkout, CheckoutSubmitting):
                raise StateError("A purchase is already being recorded")
            self.checkout = CheckoutHidden()

    def confirm_checkout(self) -> PurchaseRead:
        with self._lock:
            if isinstance(self.checkout, CheckoutSubmitting):
                raise StateError("A purchase is already being recorded")
            if not isinstance(self.checkout, CheckoutShown):
                raise StateError("Open the checkout confirmation first")
            self.checkout = CheckoutSubmitting(total=self.checkout.total)

        try:
            purchase = self.recorder.confirm(self.cart)
        except Exception:
            with self._lock:
                self.checkout = CheckoutShown(total=self.cart.total())
            raise

        with self._lock:
            self._purchases.append(purchase)
            self.checkout = CheckoutHidden()
        return purchase

    # ----- Catalog (direct) -----

    def create_item(self, name: str | None, price: float | str | None) -> ItemRead:
        with self._lock:
            item = self.catalog.create_item(name, price)
            self._items.append(item)
            return item

    def update_item(
        self,
        item_id: int,
        name: str | None = None,
        price: float | str | None = None,
    ) -> ItemRead:
        with self._lock:
            item = self.catalog.update_item(item_id, name, price)
            self._items = [item if i.id == item_id else i for i in self._items]
            return item

    def delete_item(self, item_id: int) -> None:
        """
        Remove an item from the catalog.

        Its cart line goes too, unless checkout is open: the pending cart is
        frozen then and the line keeps its own name/price snapshot.
        """
        with self._lock:
            self.catalog.delete_item(item_id)
            self._items = [i for i in self._items if i.id != item_id]
            if isinstance(self.checkout, CheckoutHidden):
                self.cart.remove(item_id)
            if isinstance(self.manage, Editing) and self.manage.item_id == item_id:
                self.manage = Browsing()

    # ----- Manage form -----

    def open_add_form(self, draft: ItemDraft | None = None) -> Adding:
        with self._lock:
            self.manage = Adding(draft=draft or ItemDraft())
            return self.manage

    def start_edit(self, item_id: int) -> Editing:
        with self._lock:
            item = self._find_item(item_id)
            self.manage = Editing(
                item_id=item.id,
                draft=ItemDraft(name=item.name, price=_price_text(item.price)),
            )
            return self.manage

    def update_draft(self, name: str | None = None, price: str | None = None) -> Adding | Editing:
        with self._lock:
            if isinstance(self.manage, Browsing):
                raise StateError("No item form is open")
            changes = {}
            if name is not None:
                changes["name"] = name
            if price is not None:
                changes["price"] = price
            draft = self.manage.draft.model_copy(update=changes)
            self.manage = self.manage.model_copy(update={"draft": draft})
            return self.manage

    def submit_form(self) -> ItemRead:
        """
        Save the open form. The form stays open (draft intact) on failure.
        """
        with self._lock:
            mode = self.manage
            if isinstance(mode, Adding):
                item = self.create_item(mode.draft.name, mode.draft.price)
            elif isinstance(mode, Editing):
                item = self.update_item(mode.item_id, mode.draft.name, mode.draft.price)
            else:
                raise StateError("No item form is open")
            self.manage = Browsing()
            return item

    def cancel_form(self) -> None:
        with self._lock:
            self.manage = Browsing()

    # ----- Reports -----

    def select_report_date(self, day: date) -> None:
        with self._lock:
            self.selected_date = day

    def daily_report(self, day: date | None = None) -> DailyReport:
        with self._lock:
            day = day or self.selected_date
            purchases = list(self._purchases)
        return self.reports.daily_report(purchases, day)
