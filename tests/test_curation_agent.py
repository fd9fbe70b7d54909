"""
Tests for recall curation: recency, brand and category filters, the cap,
the raw fallback and one-shot publishing.
"""

from datetime import date, datetime

from recall_tracker.agents.curation_agent import (
    CuratedDataset,
    CurationAgent,
    parse_publish_date,
    subtract_months,
)

from factories import make_recall, make_recalls

HOUSEHOLD = [{"Name": "Blender", "Types": "Kitchen & Household Appliances"}]


def test_date_window(clock):
    agent = CurationAgent(clock=clock)
    one_week_ago, three_months_ago = agent.date_window()

    assert one_week_ago == datetime(2025, 3, 9, 12, 0, 0)
    assert three_months_ago == datetime(2024, 12, 16, 12, 0, 0)
    assert agent.fetch_since() == date(2024, 12, 16)


def test_subtract_months_clamps_day():
    assert subtract_months(datetime(2025, 5, 31), 3) == datetime(2025, 2, 28)
    assert subtract_months(datetime(2024, 5, 31), 3) == datetime(2024, 2, 29)
    assert subtract_months(datetime(2025, 1, 15), 3) == datetime(2024, 10, 15)


def test_parse_publish_date_formats():
    assert parse_publish_date("2025-03-10") == datetime(2025, 3, 10)
    assert parse_publish_date("2025-03-10T08:30:00") == datetime(2025, 3, 10, 8, 30)
    assert parse_publish_date("March 10, 2025") is None
    assert parse_publish_date("") is None
    assert parse_publish_date(None) is None


def test_recent_recalls_use_publish_date(clock):
    agent = CurationAgent(clock=clock)
    recalls = [
        make_recall(1, last_publish_date="2025-03-10"),
        make_recall(2, last_publish_date="2025-03-09"),  # midnight, before the cutoff
        make_recall(3, last_publish_date="not a date"),
        make_recall(4),
        make_recall(5, last_publish_date="2025-03-15T09:00:00"),
    ]

    curated = agent.curate(recalls)

    assert [r.recall_id for r in curated] == [1, 5]


def test_brand_match_is_case_sensitive(clock):
    agent = CurationAgent(clock=clock)
    recalls = [
        make_recall(1, manufacturers=["Dyson"], products=HOUSEHOLD),
        make_recall(2, manufacturers=["dyson"], products=HOUSEHOLD),
        make_recall(3, manufacturers=["Acme", "KitchenAid"], products=HOUSEHOLD),
    ]

    assert [r.recall_id for r in agent.brand_recalls(recalls)] == [1, 3]


def test_brand_recalls_need_relevant_category(clock):
    agent = CurationAgent(clock=clock)
    recalls = [
        make_recall(1, manufacturers=["Sony"], products=[{"Name": "TV", "Types": "consumer ELECTRONICS"}]),
        make_recall(2, manufacturers=["Sony"], products=[{"Name": "Chemical", "Types": "Industrial"}]),
        make_recall(3, manufacturers=["Sony"], products=[{"Name": "Unknown"}]),
        make_recall(4, manufacturers=["Acme"], products=[{"Name": "Toy car", "Types": "Toys"}]),
    ]

    curated = agent.curate(recalls + make_recalls(5, start=100))

    assert [r.recall_id for r in curated] == [1]


def test_recent_before_brand_without_dedup(clock):
    agent = CurationAgent(clock=clock)
    both = make_recall(1, last_publish_date="2025-03-14", manufacturers=["Nike"],
                       products=[{"Name": "Shoe", "Types": "Clothing"}])
    brand_only = make_recall(2, manufacturers=["Nike"], products=[{"Name": "Ball", "Types": "Sports"}])
    recent_only = make_recall(3, last_publish_date="2025-03-15")

    curated = agent.curate([both, brand_only, recent_only])

    assert [r.recall_id for r in curated] == [1, 3, 1, 2]


def test_fallback_to_first_raw_recalls(clock):
    agent = CurationAgent(clock=clock)
    raw = make_recalls(250)

    curated = agent.curate(raw)

    assert len(curated) == 200
    assert [r.recall_id for r in curated] == list(range(1, 201))


def test_fallback_keeps_short_batch_whole(clock):
    agent = CurationAgent(clock=clock)
    raw = make_recalls(30)

    assert agent.curate(raw) == raw


def test_recent_recalls_capped(clock):
    agent = CurationAgent(clock=clock)
    raw = make_recalls(250, last_publish_date="2025-03-15")

    curated = agent.curate(raw)

    assert len(curated) == 200
    assert curated == raw[:200]


def test_run_populates_once(clock):
    dataset = CuratedDataset()
    agent = CurationAgent(dataset, clock=clock)
    first = make_recalls(10)

    assert agent.run(first) is True
    assert list(dataset.recalls) == first

    assert agent.run(make_recalls(5, start=500)) is False
    assert list(dataset.recalls) == first


def test_run_with_empty_batch_leaves_dataset_empty(clock):
    agent = CurationAgent(clock=clock)

    assert agent.run([]) is False
    assert agent.dataset.is_empty()


def test_replace_once():
    dataset = CuratedDataset()
    assert dataset.replace_once(make_recalls(3)) is True
    assert dataset.replace_once(make_recalls(4)) is False
    assert len(dataset) == 3
