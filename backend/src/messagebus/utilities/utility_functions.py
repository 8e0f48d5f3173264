from datetime import datetime, timezone


def now() -> datetime:
    return datetime.now(timezone.utc)

# Bus -> API views are built as dicts
def make_message(message):
    return {"id": message.id, "payload": message.payload, "ts": message.timestamp.isoformat()}

def make_topic_info(topic):
    return {
        "name": topic.name,
        "max_log_size": topic.max_log_size,
        "messages": len(topic.log),
        "subscriptions": len(topic.subscriptions),
        "active_subscriptions": len(topic.subscriptions.active()),
    }

def make_topic_stats(topic):
    return {
        "messages": topic.messages_sent,
        "retained": len(topic.log),
        "subscriptions": len(topic.subscriptions),
    }
