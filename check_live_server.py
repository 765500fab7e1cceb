import requests
import sys
import time

BASE_URL = "http://127.0.0.1:8000/api/simulation"
TIMEOUT = 5

def run_check(seconds=30):
    print("--- Checking a running simulation server ---")

    try:
        response = requests.post(f"{BASE_URL}/config", json={
            "density": 80, "optimizationEnabled": True, "algorithmType": "adaptive"
        }, timeout=TIMEOUT)
        if response.status_code != 200:
            print(f"FAIL: Config update rejected. {response.status_code} {response.text}")
            return False
        print("PASS: Config update queued.")

        bad = requests.post(f"{BASE_URL}/config", json={"density": 150}, timeout=TIMEOUT)
        if bad.status_code == 422:
            print("PASS: Out-of-range density rejected.")
        else:
            print(f"FAIL: Expected 422 for density 150, got {bad.status_code}")
            return False

        ok = True
        seen_green = set()
        deadline = time.time() + seconds
        while time.time() < deadline:
            lights = requests.get(f"{BASE_URL}/lights", timeout=TIMEOUT).json()
            greens = [light["axis"] for light in lights if light["state"] == "green"]
            seen_green.update(greens)
            if len(greens) > 1:
                print(f"FAIL: Both axes green at once. {lights}")
                ok = False
            for light in lights:
                if light["timeLeft"] < 0:
                    print(f"FAIL: Negative timeLeft. {light}")
                    ok = False
            time.sleep(0.5)

        stats = requests.get(f"{BASE_URL}/stats", timeout=TIMEOUT).json()
        print(f"Stats after {seconds}s: {stats}")
        print(f"Axes seen green: {sorted(seen_green)}")
        if ok:
            print("PASS: Lights stayed mutually exclusive.")
        return ok

    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout):
        print(f"FAIL: Could not connect to {BASE_URL}. Is the server running?")
        return False

if __name__ == "__main__":
    duration = int(sys.argv[1]) if len(sys.argv) > 1 else 30
    sys.exit(0 if run_check(duration) else 1)
