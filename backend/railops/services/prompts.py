"""Prompt text sent to the generative text provider."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from railops.services.seed_data import SEED_TRAIN_IDS

_IST = ZoneInfo("Asia/Kolkata")

TRAIN_SCHEMA = """[
    {
        "id": "train_number",
        "name": "train_name",
        "route": "start → destination",
        "status": "On Time|Delayed|Critical|Running|Stopped|Held",
        "delay": number_of_minutes,
        "speed": current_speed,
        "location": "current_location",
        "passengers": number,
        "nextStop": "next_station",
        "eta": "time",
        "statusColor": "success|warning|destructive"
    }
]"""

JSON_ONLY = "Ensure valid JSON, no comments."


def _fleet(trains: list[dict[str, Any]]) -> str:
    return json.dumps(trains, indent=2, ensure_ascii=False)


def _now_ist() -> str:
    return datetime.now(_IST).strftime("%H:%M:%S")


def initial_fleet(hub: str) -> str:
    ids = ", ".join(f'"{train_id}"' for train_id in SEED_TRAIN_IDS)
    return f"""
Generate realistic real-time train data for Indian Railways, {hub} hub.
Provide data for {len(SEED_TRAIN_IDS)} trains in the following JSON format:
{TRAIN_SCHEMA}
Use train numbers: {ids}.
Include a mix of on-time, delayed, and critical trains. Make locations and ETAs realistic for routes from {hub}.
{JSON_ONLY}
"""


def fleet_sync(hub: str, trains: list[dict[str, Any]]) -> str:
    return f"""
Generate updated real-time train status for Indian Railways, {hub} hub, current time: {_now_ist()}.
Update the status, locations, speeds, delays, and ETAs for these existing trains to simulate real-time movement:
{_fleet(trains)}

Provide updated data in the exact same JSON format:
{TRAIN_SCHEMA}

Make realistic updates:
- Moving trains should advance locations and reduce remaining time
- Some trains may develop new delays or issues
- Maintain route consistency but update progress
- Keep passenger counts similar unless there's an incident
- Update ETAs based on current progress
{JSON_ONLY}
"""


def route_options(train: dict[str, Any], hub: str) -> str:
    return f"""
Generate realistic route data for train {train["id"]} ({train["name"]}) from hub {hub}.
Provide:
- "currentRoute": Object with:
    - stations: Array of station names (5-10 stations, including {hub} as start).
    - distance: Total distance in km (200-2000 km).
    - estimatedTime: Estimated travel time (e.g., "5h 30m").
- "alternateRoutes": Array of 1-3 alternate route objects, each with:
    - stations: Array of station names (different from current route).
    - distance: Total distance in km.
    - estimatedTime: Estimated travel time.
{JSON_ONLY}
"""


def analytics(hub: str) -> str:
    ids = ", ".join(f'"{train_id}"' for train_id in SEED_TRAIN_IDS)
    return f"""
Generate simulated analytics data for Indian Railways trains departing from "{hub}". Return JSON with:
- "performanceTrends": Object with:
  - onTimePercentage: Percentage of trains on time (60-80).
  - averageDelay: Average delay in minutes (5-20).
  - criticalIncidents: Number of critical delays (1-3).
  - averageSpeed: Average speed in km/h (80-110).
  - passengerLoadFactor: Average passenger load as percentage of capacity (60-90).
- "scheduleAnalysis": Array of {len(SEED_TRAIN_IDS)} objects, each with:
  - id: Train number (use: {ids}).
  - name: Actual train name.
  - scheduledDeparture: 24-hour format (e.g., "14:00").
  - actualDeparture: 24-hour format or "Pending".
  - departureDeviation: Minutes early (-) or late (+).
  - reliabilityScore: Percentage (70-100).
{JSON_ONLY}
"""


def alerts(hub: str) -> str:
    return f"""
Generate simulated real-time alert data for Indian Railways for the hub "{hub}". Return JSON with:
- "alerts" array (10 alerts) with:
  - id: Unique alert ID (e.g., "1", "2").
  - title: Brief alert title (e.g., "Signal Failure").
  - description: Detailed description of the alert.
  - severity: "critical", "warning", or "info" (20% critical, 40% warning, 40% info).
  - time: Time since alert in human-readable format (e.g., "2 min ago").
  - section: Railway section (e.g., "{hub}-Agra").
{JSON_ONLY}
"""


def emergency_stop(hub: str, trains: list[dict[str, Any]]) -> str:
    return f"""
Simulate an emergency stop for all trains in {hub} hub.
Update these trains after emergency stop:
{_fleet(trains)}

For each train:
- Set speed to 0
- Set status to "Emergency Stopped"
- Set statusColor to "destructive"
- Update location to current safe stopping point
- Set eta to "Pending Emergency"
- Add appropriate delay (e.g., 30+ minutes)

Return the updated JSON array in the exact format. Keep every train id unchanged.
{JSON_ONLY}
"""


def backup_routes(hub: str, trains: list[dict[str, Any]]) -> str:
    return f"""
Simulate activation of backup routes for trains in {hub} hub due to emergency.
Current trains:
{_fleet(trains)}

For each train:
- Create a realistic backup route (e.g., detour via alternate station)
- Update route to include backup path
- Set status to "On Backup Route"
- Set statusColor to "warning"
- Set eta to "Recalculating Backup"
- Adjust delay appropriately

Return the updated JSON array in the exact format. Keep every train id unchanged.
{JSON_ONLY}
"""


def optimize_routes(hub: str, trains: list[dict[str, Any]]) -> str:
    return f"""
Optimize routes for trains in {hub} hub to reduce delays and improve efficiency.
Current trains:
{_fleet(trains)}

For delayed trains:
- Reduce delay by 20-50% through route optimization
- Update status to "Optimized Route"
- Set statusColor to "success" if delay reduced significantly
- Recalculate realistic ETAs

For on-time trains:
- Maintain current status or slightly improve ETA

Return the updated JSON array in the exact format. Keep every train id unchanged.
{JSON_ONLY}
"""


def maintenance_schedule(hub: str, maintenance_type: str, train_ids: list[str]) -> str:
    return f"""
Generate a maintenance schedule for Indian Railways {hub} hub.
Maintenance Type: {maintenance_type}
Hub: {hub}
Known trains: {", ".join(train_ids)}

Provide:
- Schedule details (time windows, affected trains/routes)
- Required resources
- Expected downtime
- Safety protocols

Return as JSON: {{
    "schedule": "detailed schedule",
    "resources": ["list of resources"],
    "downtime": "expected duration",
    "protocols": "safety measures",
    "affectedTrains": ["train IDs from the known trains"]
}}
{JSON_ONLY}
"""


def platform_allocation(hub: str, trains: list[dict[str, Any]]) -> str:
    return f"""
Optimize platform allocation for arriving trains at {hub} hub.
Current trains and their ETAs:
{_fleet(trains)}

Assign platforms (1-16) to trains based on:
- Arrival time (ETA)
- Train type and priority
- Platform availability
- Turnaround time requirements

Return a single JSON object:
{{
    "trains": [updated train objects in the exact train format, each with an added integer "platform" field and nextStop including the platform (e.g., "{hub} - Platform 5")],
    "summary": {{allocation summary object}}
}}
{JSON_ONLY}
"""


def reroute(train: dict[str, Any], new_route: list[str]) -> str:
    return f"""
Simulate rerouting of train {train["id"]} to new route: {" → ".join(new_route)}
Current train data:
{_fleet([train])[1:-1].strip()}

Update the train with:
- New route
- status: "Rerouted"
- statusColor: "warning"
- eta: "Recalculating Route"
- Realistic new location and nextStop based on new route
- Adjust speed and delay appropriately

Return a single train JSON object in the exact format.
{JSON_ONLY}
"""


def toggle_speed(train: dict[str, Any], action: str) -> str:
    return f"""
Simulate {action} action for train {train["id"]}.
Current train data:
{_fleet([train])[1:-1].strip()}

If action is "hold":
- Set speed to 0
- status: "Held at Station"
- statusColor: "warning"
- eta: "On Hold"
- Update location to nearest station

If action is "resume":
- Set speed to appropriate value (80-120 km/h)
- status: "Resumed Travel"
- statusColor: "success"
- eta: "Recalculating"
- Update location if needed

Return a single train JSON object in the exact format.
{JSON_ONLY}
"""


def emergency_contact(hub: str, message: str) -> str:
    return f"""
Generate an emergency services contact log for Train Control Center.
Hub: {hub}
Message: {message}
Time: {_now_ist()}

Provide a formatted log entry including:
- Timestamp
- Hub location
- Emergency type (inferred from message)
- Response protocol initiated
- Expected response time

Return as JSON: {{"log": "formatted log", "protocol": "response protocol", "eta": "expected response time"}}
{JSON_ONLY}
"""


def recommendations(trains: list[dict[str, Any]]) -> str:
    return f"""
Based on the following train statuses, generate AI recommendations for railway traffic optimization.
Each recommendation must be a JSON object:
{{
  "id": string,
  "type": "routing" | "timing" | "platform",
  "title": string,
  "description": string,
  "confidence": number (0-100),
  "estimatedImprovement": string,
  "trainAffected": string,
  "timeWindow": string
}}
Output a JSON array of 1-3 recommendations.
Train statuses:
{_fleet(trains)}
{JSON_ONLY}
"""
