from messagebus import BacklogStrategy, SubscriptionOptions, get_bus

def on_order(message):
    print("Received:", message.id, message.payload)

def main():
    bus = get_bus()
    orders = bus.get_topic("orders", max_log_size=5)
    for n in range(1, 4):
        orders.send({"order_id": f"ORD-{n}"})

    # late subscriber only wants the newest order from the backlog
    sub = orders.subscribe(on_order, SubscriptionOptions(id=1, backlog_strategy=BacklogStrategy.LATEST))
    orders.send({"order_id": "ORD-4"})

    sub.unsubscribe()
    print("Unsubscribed; publishing while away...")
    orders.send({"order_id": "ORD-5"})
    orders.send({"order_id": "ORD-6"})

    # resuming by id replays only what was missed
    orders.subscribe(on_order, SubscriptionOptions(id=1))
    print("Cursor:", sub.last_seen_message_id)

if __name__ == "__main__":
    main()
