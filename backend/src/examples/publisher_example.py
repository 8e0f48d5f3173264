import uuid

from messagebus import get_bus

def main():
    bus = get_bus()
    # keep only the 5 most recent orders around for late subscribers
    orders = bus.get_topic("orders", max_log_size=5)
    for n in range(1, 8):
        payload = {"order_id": f"ORD-{n}", "amount": 9.99 * n, "currency": "USD", "ref": str(uuid.uuid4())}
        message = orders.send(payload)
        print("Published:", message.id, payload)
    print("Retained ids:", [m.id for m in orders.log])

if __name__ == "__main__":
    main()
