from datetime import datetime, timezone

import uvicorn
from fastapi.responses import JSONResponse
from fastapi import FastAPI, HTTPException

from .registry import get_bus
from .schemas import CreateTopicRequest
from .utilities import API_HOST, API_PORT, make_message, make_topic_info, make_topic_stats, setup_logger

app = FastAPI(title="In-process message bus")
logger = setup_logger()

# Process bus; subscribers live in this process, the API only inspects it
BUS = get_bus()

# Stats
START_TS = datetime.now(timezone.utc)

# -------------- REST endpoints --------------

@app.post("/topics", status_code=201)
def rest_create_topic(req: CreateTopicRequest):
    name = req.name
    if not name:
        raise HTTPException(status_code=400, detail="name required")
    if name in BUS:
        topic = BUS.get_topic(name)
        return JSONResponse(status_code=200, content={"status": "exists", "topic": name,
                                                      "max_log_size": topic.max_log_size})
    topic = BUS.get_topic(name, req.max_log_size)
    return {"status": "created", "topic": name, "max_log_size": topic.max_log_size}

@app.get("/topics")
def rest_list_topics():
    out = []
    for t in BUS.topics:
        with t.lock:
            out.append(make_topic_info(t))
    return {"topics": out}

@app.get("/topics/{name}/messages")
def rest_topic_messages(name: str):
    try:
        topic = BUS.find_topic(name)
    except KeyError:
        raise HTTPException(status_code=404, detail="not found")
    with topic.lock:
        messages = [make_message(m) for m in topic.log]
    return {"topic": name, "messages": messages}

@app.get("/health")
def rest_health():
    now = datetime.now(timezone.utc)
    uptime_sec = int((now - START_TS).total_seconds())
    topics = BUS.topics
    subscriptions_count = sum(len(t.subscriptions) for t in topics)
    return {"uptime_sec": uptime_sec, "topics": len(topics), "subscriptions": subscriptions_count}

@app.get("/stats")
def rest_stats():
    out = {}
    for t in BUS.topics:
        with t.lock:
            out[t.name] = make_topic_stats(t)
    return {"topics": out}


def run():
    logger.info("serving bus inspection API on %s:%d", API_HOST, API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    run()
