#!/usr/bin/env python3
"""Walk a running booking API through a full booking."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"

PROFESSIONAL = {
    "id": 1,
    "name": "Ana Souza",
    "profession": "Dentist",
    "appointmentSpacing": "30",
    "schedules": [
        {"startTime": "09:00", "endTime": "12:00", "weekday": day.title(), "weekdayEn": day}
        for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
    ],
}


def step(client: httpx.Client, method: str, path: str, payload: dict | None = None) -> dict:
    response = client.request(method, f"{BASE_URL}{path}", json=payload, timeout=30.0)
    print(f"{method} {path} -> {response.status_code}")
    response.raise_for_status()
    return response.json()


def main():
    print("\n🚀 Testing Booking API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except Exception:
        print("❌ Server is not running!")
        print(f"   Please start it with: uvicorn agenda.main:app --reload --port 8001")
        sys.exit(1)

    with httpx.Client() as client:
        try:
            session = step(client, "POST", "/api/v1/sessions", {"professionals": [PROFESSIONAL], "serviceName": "Checkup"})
            base = f"/api/v1/sessions/{session['session_id']}"

            step(client, "POST", f"{base}/professional", {"professional_id": 1})
            session = step(client, "POST", f"{base}/date", {"day": 1})
            print(f"   Available: {', '.join(session['available_slots'])}")

            step(client, "POST", f"{base}/slot", {"slot": session["available_slots"][0]})
            result = step(client, "POST", f"{base}/confirm")
            print(f"✅ Booked for {result['scheduled_date']}")
        except httpx.HTTPStatusError as e:
            print(f"❌ HTTP Error: {e.response.status_code}")
            print(f"Response: {e.response.text}")
            sys.exit(1)


if __name__ == "__main__":
    main()
