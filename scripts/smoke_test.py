import os
import sys

# Ensure project root is on sys.path so we can import backend.py
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import backend


def run():
    print("Endpoint smoke test starting...")

    try:
        client = backend.app.test_client()
        r = client.get("/health")
        print("GET /health:", r.status_code, r.json)

        r2 = client.post("/generate_ring_stl", json={"inner_diameter": 50, "thickness": 2, "height": 20})
        print("POST /generate_ring_stl:", r2.status_code, "bytes:", len(r2.data))

        r3 = client.post("/analyze_stl", data=r2.data, content_type="model/stl")
        print("POST /analyze_stl:", r3.status_code, r3.json)

        r4 = client.post("/generate_adapter_stl", json={"inner1": 50, "outer2": 63})
        print("POST /generate_adapter_stl:", r4.status_code, "bytes:", len(r4.data))
    except Exception as e:
        print("Endpoints FAIL:", e)

    print("Endpoint smoke test done.")


if __name__ == "__main__":
    run()
