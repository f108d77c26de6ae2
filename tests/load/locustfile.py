"""
Load Testing Scripts

Locust load tests for the ZenStudent API.
The server holds one companion session, so concurrent sends are
expected to see 409 while a reply is in flight.

USAGE:
    locust -f tests/load/locustfile.py --host=http://localhost:8000
"""

import random

from locust import between, events, task
from locust.contrib.fasthttp import FastHttpUser

API = "/api/v1"


class ZenStudentUser(FastHttpUser):
    """Simulated student moving between chat, mood and exercises."""

    wait_time = between(1, 5)

    @task(10)
    def health_check(self):
        with self.client.get(f"{API}/health/live", catch_response=True) as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Health check failed: {response.status_code}")

    @task(3)
    def metrics_endpoint(self):
        self.client.get(f"{API}/metrics")

    @task(5)
    def read_conversation(self):
        self.client.get(f"{API}/chat/messages")

    @task(2)
    def send_message(self):
        messages = [
            "I can't focus before my exam",
            "I slept badly again",
            "Can we do a breathing exercise?",
            "Thanks, that helped a little",
        ]
        with self.client.post(
            f"{API}/chat/messages",
            json={"text": random.choice(messages)},
            catch_response=True,
        ) as response:
            # 409: another simulated user's send is in flight
            if response.status_code in (200, 409):
                response.success()
            else:
                response.failure(f"Send failed: {response.status_code}")

    @task(2)
    def record_mood(self):
        self.client.post(f"{API}/mood", json={"score": random.randint(0, 5)})

    @task(1)
    def breathing_exercise(self):
        exercise = random.choice(["breathing_4_6", "box_breathing", "meditation"])
        self.client.post(f"{API}/exercises/{exercise}/start")
        self.client.get(f"{API}/exercises/status")
        self.client.post(f"{API}/exercises/stop")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    print(f"Total requests: {environment.stats.total.num_requests}")
    print(f"Failures: {environment.stats.total.num_failures}")
    print(f"Avg response time: {environment.stats.total.avg_response_time:.2f}ms")
