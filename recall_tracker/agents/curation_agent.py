import logging
import threading
from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from recall_tracker.models.recall import Recall

logger = logging.getLogger("CurationAgent")

Clock = Callable[[], datetime]


def subtract_months(moment: datetime, months: int) -> datetime:
    """
    Step a datetime back by whole calendar months, clamping the day.

    Args:
        moment: The starting point
        months: Number of months to go back

    Returns:
        The shifted datetime, e.g. May 31 minus 3 months is Feb 28/29
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def parse_publish_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a LastPublishDate string.

    Returns None instead of raising when the value is missing or unreadable.
    """
    if not value:
        return None

    for fmt in CurationAgent.DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


class CuratedDataset:
    """
    The session's curated recall list.

    Starts empty and is filled exactly once; readers get a snapshot tuple
    and never mutate it.
    """

    def __init__(self):
        self._recalls: Tuple[Recall, ...] = ()
        self._lock = threading.Lock()

    @property
    def recalls(self) -> Tuple[Recall, ...]:
        return self._recalls

    def __len__(self) -> int:
        return len(self._recalls)

    def is_empty(self) -> bool:
        return not self._recalls

    def replace_once(self, recalls: Sequence[Recall]) -> bool:
        """
        Install the curated list if nothing has been installed yet.

        Returns:
            True if the dataset changed, False if it was already populated
        """
        with self._lock:
            if self._recalls:
                return False
            self._recalls = tuple(recalls)
            return True


class CurationAgent:
    """
    Agent responsible for narrowing a raw recall batch down to a bounded,
    relevant subset: recently published recalls plus recalls from
    well-known brands in consumer product categories.
    """

    POPULAR_BRANDS = frozenset([
        "Apple", "Samsung", "Tesla", "Toyota", "Sony", "LG", "Honda", "Ford", "Chevrolet", "BMW",
        "Nike", "Adidas", "Under Armour", "North Face", "Patagonia", "Hydro Flask", "Yeti", "Stanley",
        "PepsiCo", "Coca-Cola", "Frito-Lay", "Nestlé", "Procter & Gamble", "Johnson & Johnson",
        "Unilever", "Colgate-Palmolive", "Keurig Dr Pepper", "General Mills", "Kellogg's", "Mondelez",
        "Mars", "Clorox", "3M", "Dyson", "Whirlpool", "KitchenAid", "Black+Decker", "DeWalt", "Makita",
        "Energizer", "Duracell", "HP", "Dell", "Lenovo", "Microsoft", "Google", "Amazon", "Nintendo",
        "PlayStation", "Xbox"
    ])

    RELEVANT_TYPES = (
        "Electronics", "Automobile", "Household", "Toys", "Food", "Appliances",
        "Outdoor Equipment", "Sports", "Furniture", "Clothing", "Baby Products", "Health & Beauty"
    )

    DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%S.%f")

    RECENT_DAYS = 7
    BRAND_WINDOW_MONTHS = 3

    def __init__(self, dataset: Optional[CuratedDataset] = None, clock: Clock = datetime.now,
                 max_recalls: int = 200):
        """
        Initialize the Curation Agent.

        Args:
            dataset: The curated dataset this agent fills; a fresh one is created if omitted
            clock: Source of the current time (naive local datetimes)
            max_recalls: Upper bound on the curated list length
        """
        self.dataset = dataset if dataset is not None else CuratedDataset()
        self.clock = clock
        self.max_recalls = max_recalls
        logger.info("Curation Agent initialized")

    def date_window(self) -> Tuple[datetime, datetime]:
        """
        Returns:
            (one_week_ago, three_months_ago) relative to the injected clock
        """
        now = self.clock()
        return now - timedelta(days=self.RECENT_DAYS), subtract_months(now, self.BRAND_WINDOW_MONTHS)

    def fetch_since(self) -> date:
        """The LastPublishDateStart to request from the API."""
        return self.date_window()[1].date()

    def recent_recalls(self, recalls: Sequence[Recall], since: datetime) -> List[Recall]:
        """
        Recalls whose publish date parses and falls on or after a cutoff.

        Args:
            recalls: Recalls to filter, in order
            since: The cutoff; unparsable publish dates never qualify

        Returns:
            The qualifying recalls, in input order
        """
        recent = []
        for recall in recalls:
            published = parse_publish_date(recall.last_publish_date)
            if published is not None and published >= since:
                recent.append(recall)
        return recent

    def brand_recalls(self, recalls: Sequence[Recall]) -> List[Recall]:
        """
        Recalls with at least one manufacturer on the popular-brand list.

        Args:
            recalls: Recalls to filter, in order

        Returns:
            The matching recalls, in input order
        """
        # Manufacturer names are matched exactly, case included.
        return [
            recall for recall in recalls
            if any(company.name in self.POPULAR_BRANDS for company in recall.manufacturers)
        ]

    def has_relevant_product(self, recall: Recall) -> bool:
        """Check whether any product's Types mentions a consumer category keyword."""
        for product in recall.products:
            if not product.types:
                continue
            types = product.types.lower()
            if any(keyword.lower() in types for keyword in self.RELEVANT_TYPES):
                return True
        return False

    def curate(self, raw_recalls: Sequence[Recall]) -> List[Recall]:
        """
        Select the relevant subset of a raw batch without touching the dataset.

        Args:
            raw_recalls: Every recall returned by a single fetch, in wire order

        Returns:
            Recent recalls followed by brand recalls, capped at max_recalls, or
            the first max_recalls raw recalls when nothing qualifies
        """
        one_week_ago, _ = self.date_window()

        recent = self.recent_recalls(raw_recalls, one_week_ago)
        brand = [recall for recall in self.brand_recalls(raw_recalls) if self.has_relevant_product(recall)]
        logger.info(f"Found {len(recent)} recent and {len(brand)} brand recalls out of {len(raw_recalls)}")

        curated = (recent + brand)[:self.max_recalls]
        if not curated:
            logger.info("No recent or brand recalls, falling back to the unfiltered batch")
            curated = list(raw_recalls[:self.max_recalls])

        return curated

    def run(self, raw_recalls: Sequence[Recall]) -> bool:
        """
        Curate a raw batch into the dataset. A no-op once the dataset is populated.

        Args:
            raw_recalls: Every recall returned by a single fetch

        Returns:
            True if the dataset was filled by this call
        """
        if not self.dataset.is_empty():
            logger.info("Curated dataset already populated, skipping curation")
            return False

        curated = self.curate(raw_recalls)
        if not curated:
            logger.warning("Fetched batch was empty, curated dataset left unchanged")
            return False

        changed = self.dataset.replace_once(curated)
        if changed:
            logger.info(f"Curated dataset populated with {len(curated)} recalls")
        return changed
