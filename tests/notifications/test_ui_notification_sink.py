import unittest

from notifications import (
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    NotificationPermissionError,
    UINotificationSink,
)


class _PublisherStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []

    def publish(self, event_type: str, **payload) -> None:
        self.events.append((event_type, payload))


class UINotificationSinkTests(unittest.TestCase):
    def test_enabled_sink_publishes_notification_event(self) -> None:
        publisher = _PublisherStub()
        sink = UINotificationSink(publisher)

        self.assertEqual(PERMISSION_GRANTED, sink.request_permission())
        sink.show("Feeding Reminder", "It's been 3h 0m since the last feeding.")

        self.assertEqual(
            [
                (
                    "notification",
                    {
                        "title": "Feeding Reminder",
                        "body": "It's been 3h 0m since the last feeding.",
                    },
                )
            ],
            publisher.events,
        )

    def test_disabled_sink_denies_permission_and_refuses_to_show(self) -> None:
        publisher = _PublisherStub()
        sink = UINotificationSink(publisher, enabled=False)

        self.assertEqual(PERMISSION_DENIED, sink.request_permission())
        with self.assertRaises(NotificationPermissionError):
            sink.show("Sleep Reminder", "body")
        self.assertEqual([], publisher.events)


if __name__ == "__main__":
    unittest.main()
