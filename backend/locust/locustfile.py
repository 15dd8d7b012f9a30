"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags browse     # Venue/event reads
  locust -f locustfile.py --tags session    # Login + refresh churn
  locust -f locustfile.py --tags edge       # Bad input
  locust -f locustfile.py                   # All tests
"""

import random
import string

from locust import HttpUser, between, events, tag, task

# Shared state
VENUE_IDS = []
EVENT_IDS = []

PASSWORD = "load123"


def random_username():
    return "u_" + "".join(random.choices(string.ascii_lowercase, k=8))


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("Target needs a seeded dataset (AUTO_SEED=true or `cultural-spa seed`)")
    print("=" * 60)


class SignedInUser(HttpUser):
    """Registers a fresh account and keeps its access token."""

    abstract = True

    def on_start(self):
        self.username = random_username()
        resp = self.client.post("/api/users/register", json={
            "username": self.username,
            "password": PASSWORD,
        })
        if resp.status_code == 201:
            self.headers = {"Authorization": f"Bearer {resp.json()['accessToken']}"}
        else:
            self.headers = {}


class BrowsingUser(SignedInUser):
    """
    TEST 1: Read throughput on venues and events

    Run: locust -f locustfile.py --tags browse -u 100 -r 20 --run-time 60s
    """

    wait_time = between(0.1, 0.5)

    @tag("browse")
    @task(5)
    def list_venues(self):
        resp = self.client.get("/api/venues", headers=self.headers)
        if resp.status_code == 200:
            for venue in resp.json():
                if venue["id"] not in VENUE_IDS:
                    VENUE_IDS.append(venue["id"])

    @tag("browse")
    @task(10)
    def list_events(self):
        params = {
            "limit": 20,
            "offset": random.choice([0, 20]),
            "sort": random.choice(["date", "title"]),
            "order": random.choice(["asc", "desc"]),
        }
        resp = self.client.get("/api/events", params=params, headers=self.headers, name="/api/events")
        if resp.status_code == 200:
            for event in resp.json()["items"]:
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("browse")
    @task(3)
    def search_events(self):
        term = random.choice(["opera", "jazz", "dance", "piano"])
        self.client.get("/api/events", params={"q": term}, headers=self.headers, name="/api/events?q")

    @tag("browse")
    @task(3)
    def event_detail(self):
        if EVENT_IDS:
            self.client.get(f"/api/events/{random.choice(EVENT_IDS)}", headers=self.headers,
                            name="/api/events/{id}")

    @tag("browse")
    @task(2)
    def random_events(self):
        self.client.get("/api/events/random", headers=self.headers)

    @tag("browse")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class SessionUser(HttpUser):
    """
    TEST 2: Login and refresh churn (bcrypt cost dominates)

    Run: locust -f locustfile.py --tags session -u 20 -r 5 --run-time 60s
    """

    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.username = random_username()
        self.client.post("/api/users/register", json={"username": self.username, "password": PASSWORD})

    @tag("session")
    @task(3)
    def login(self):
        self.client.post("/api/users/login", json={"username": self.username, "password": PASSWORD})

    @tag("session")
    @task(5)
    def refresh(self):
        # The client's cookie jar carries the refresh cookie from the last login
        with self.client.post("/api/users/refresh", catch_response=True) as resp:
            if resp.status_code in (200, 401):
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class EdgeCaseUser(SignedInUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """

    wait_time = between(0.5, 1.5)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def comment_missing_venue(self):
        with self.client.post("/api/comments/000000", json={"text": "hi"},
                              headers=self.headers, catch_response=True) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def comment_too_long(self):
        venue_id = random.choice(VENUE_IDS) if VENUE_IDS else "000000"
        with self.client.post(f"/api/comments/{venue_id}", json={"text": "x" * 1001},
                              headers=self.headers, catch_response=True, name="/api/comments/{id}") as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def limit_out_of_range(self):
        with self.client.get("/api/events", params={"limit": 1000},
                             headers=self.headers, catch_response=True) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/favorites", data="not json at all",
                              headers={**self.headers, "Content-Type": "application/json"},
                              catch_response=True) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.get("/api/favorites", catch_response=True) as resp:
            self._expect(resp, [401])

    @tag("edge")
    @task
    def admin_route_as_member(self):
        with self.client.get("/api/admin/dashboard", headers=self.headers, catch_response=True) as resp:
            self._expect(resp, [403])


class RealisticUser(SignedInUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing, some comments and favorites.
    """

    wait_time = between(1, 3)

    @task(40)
    def browse_events(self):
        resp = self.client.get("/api/events", params={"limit": 20}, headers=self.headers)
        if resp.status_code == 200:
            for event in resp.json()["items"]:
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])
                if event["venueId"] not in VENUE_IDS:
                    VENUE_IDS.append(event["venueId"])

    @task(20)
    def view_venue(self):
        if VENUE_IDS:
            venue_id = random.choice(VENUE_IDS)
            self.client.get(f"/api/venues/{venue_id}", headers=self.headers, name="/api/venues/{id}")
            self.client.get(f"/api/comments/{venue_id}", headers=self.headers, name="/api/comments/{id}")

    @task(5)
    def post_comment(self):
        if VENUE_IDS and self.headers:
            self.client.post(f"/api/comments/{random.choice(VENUE_IDS)}",
                             json={"text": f"Load comment {random.randint(1, 10000)}"},
                             headers=self.headers, name="/api/comments/{id}")

    @task(5)
    def favorite_venue(self):
        if VENUE_IDS and self.headers:
            with self.client.post("/api/favorites", json={"venueId": random.choice(VENUE_IDS)},
                                  headers=self.headers, catch_response=True) as resp:
                # Re-adding an existing favorite is expected
                if resp.status_code in (201, 409):
                    resp.success()
