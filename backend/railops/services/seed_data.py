"""Static seed and fallback data.

The same literals seed the registry at startup and stand in for provider
output whenever a call fails, so every endpoint kind has exactly one
fallback definition.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from railops.models.trains import TrainRecord

SEED_TRAINS: tuple[dict[str, Any], ...] = (
    {
        "id": "12055",
        "name": "New Delhi - Dehradun Jan Shatabdi Express",
        "route": "New Delhi → Dehradun",
        "status": "On Time",
        "delay": 0,
        "speed": 110,
        "location": "Meerut City",
        "passengers": 850,
        "nextStop": "Haridwar",
        "eta": "14:25",
        "statusColor": "success",
    },
    {
        "id": "12309",
        "name": "Rajdhani Express",
        "route": "New Delhi → Patna",
        "status": "Delayed",
        "delay": 12,
        "speed": 95,
        "location": "Kanpur Central",
        "passengers": 620,
        "nextStop": "Allahabad",
        "eta": "16:40",
        "statusColor": "warning",
    },
    {
        "id": "12951",
        "name": "Mumbai Rajdhani Express",
        "route": "New Delhi → Mumbai",
        "status": "Critical",
        "delay": 45,
        "speed": 0,
        "location": "Mathura",
        "passengers": 1200,
        "nextStop": "Signal Clearance",
        "eta": "Pending",
        "statusColor": "destructive",
    },
    {
        "id": "12002",
        "name": "New Delhi - Bhopal Shatabdi Express",
        "route": "New Delhi → Bhopal",
        "status": "On Time",
        "delay": 0,
        "speed": 100,
        "location": "Agra Cantt",
        "passengers": 700,
        "nextStop": "Jhansi",
        "eta": "15:30",
        "statusColor": "success",
    },
    {
        "id": "12423",
        "name": "Dibrugarh Rajdhani Express",
        "route": "New Delhi → Dibrugarh",
        "status": "Delayed",
        "delay": 20,
        "speed": 90,
        "location": "Moradabad",
        "passengers": 900,
        "nextStop": "Bareilly",
        "eta": "18:00",
        "statusColor": "warning",
    },
    {
        "id": "12295",
        "name": "Sanghamitra Express",
        "route": "New Delhi → Bangalore",
        "status": "On Time",
        "delay": 0,
        "speed": 105,
        "location": "Jhansi",
        "passengers": 950,
        "nextStop": "Bhopal",
        "eta": "20:15",
        "statusColor": "success",
    },
    {
        "id": "12621",
        "name": "Tamil Nadu Express",
        "route": "New Delhi → Chennai",
        "status": "Delayed",
        "delay": 15,
        "speed": 85,
        "location": "Gwalior",
        "passengers": 800,
        "nextStop": "Nagpur",
        "eta": "22:30",
        "statusColor": "warning",
    },
    {
        "id": "12401",
        "name": "Magadh Express",
        "route": "New Delhi → Patna",
        "status": "On Time",
        "delay": 0,
        "speed": 100,
        "location": "Aligarh",
        "passengers": 700,
        "nextStop": "Tundla",
        "eta": "16:50",
        "statusColor": "success",
    },
    {
        "id": "12301",
        "name": "Howrah Rajdhani Express",
        "route": "New Delhi → Howrah",
        "status": "Critical",
        "delay": 50,
        "speed": 0,
        "location": "Allahabad",
        "passengers": 1100,
        "nextStop": "Signal Clearance",
        "eta": "Pending",
        "statusColor": "destructive",
    },
    {
        "id": "12019",
        "name": "Howrah - Ranchi Shatabdi Express",
        "route": "New Delhi → Ranchi",
        "status": "On Time",
        "delay": 0,
        "speed": 115,
        "location": "Varanasi",
        "passengers": 650,
        "nextStop": "Daltonganj",
        "eta": "17:45",
        "statusColor": "success",
    },
)

SEED_TRAIN_IDS: tuple[str, ...] = tuple(train["id"] for train in SEED_TRAINS)

# (scheduled, actual, deviation minutes, reliability %) per seed train.
_SCHEDULE: dict[str, tuple[str, str, int, int]] = {
    "12055": ("14:00", "14:00", 0, 95),
    "12309": ("15:30", "15:42", 12, 85),
    "12951": ("16:00", "16:45", 45, 70),
    "12002": ("13:00", "13:00", 0, 90),
    "12423": ("17:00", "17:20", 20, 80),
    "12295": ("18:00", "18:00", 0, 92),
    "12621": ("20:00", "20:15", 15, 82),
    "12401": ("15:00", "15:00", 0, 88),
    "12301": ("16:30", "17:20", 50, 75),
    "12019": ("14:30", "14:30", 0, 93),
}

# (title, description, severity, minutes ago, section suffix)
_ALERTS: tuple[tuple[str, str, str, int, str], ...] = (
    ("Signal Failure", "Junction A-7 experiencing intermittent signal issues", "critical", 2, "-Agra"),
    ("Delayed Train", "Express 12345 running 8 minutes behind schedule", "warning", 5, "-Pune"),
    ("Maintenance Window", "Scheduled track maintenance in progress", "info", 10, "-Bangalore"),
    ("Platform Congestion", "Platform 3 approaching capacity limits", "warning", 15, " Central"),
    ("Track Obstruction", "Debris reported on tracks near Station B", "critical", 20, "-Jaipur"),
    ("Power Supply Issue", "Intermittent power supply affecting train operations", "warning", 25, "-Lucknow"),
    ("Staff Coordination", "Staff briefing scheduled for next shift", "info", 30, " Central"),
    ("Weather Advisory", "Heavy rain expected, potential delays", "warning", 35, "-Mumbai"),
    ("System Update", "Control system software update completed", "info", 40, "-Chennai"),
    ("Emergency Drill", "Scheduled emergency evacuation drill", "info", 45, "-Kolkata"),
)


def seed_trains() -> list[TrainRecord]:
    """Fresh TrainRecord objects for the seed fleet."""
    return [TrainRecord.model_validate(train) for train in SEED_TRAINS]


def seed_train_payloads() -> list[dict[str, Any]]:
    return deepcopy(list(SEED_TRAINS))


def fallback_analytics() -> dict[str, Any]:
    names = {train["id"]: train["name"] for train in SEED_TRAINS}
    return {
        "performanceTrends": {
            "onTimePercentage": 65,
            "averageDelay": 10,
            "criticalIncidents": 2,
            "averageSpeed": 95,
            "passengerLoadFactor": 75,
        },
        "scheduleAnalysis": [
            {
                "id": train_id,
                "name": names[train_id],
                "scheduledDeparture": scheduled,
                "actualDeparture": actual,
                "departureDeviation": deviation,
                "reliabilityScore": reliability,
            }
            for train_id, (scheduled, actual, deviation, reliability) in _SCHEDULE.items()
        ],
    }


def fallback_alerts(hub: str) -> list[dict[str, Any]]:
    return [
        {
            "id": str(number),
            "title": title,
            "description": description,
            "severity": severity,
            "time": f"{minutes} min ago",
            "section": f"{hub}{suffix}",
        }
        for number, (title, description, severity, minutes, suffix) in enumerate(
            _ALERTS, start=1
        )
    ]


def fallback_route_options(hub: str, train: TrainRecord) -> dict[str, Any]:
    _, destination = train.route_endpoints()
    return {
        "currentRoute": {
            "stations": [hub, "Agra", "Gwalior", destination],
            "distance": 500,
            "estimatedTime": "6h 0m",
        },
        "alternateRoutes": [
            {
                "stations": [hub, "Mathura", "Jhansi", destination],
                "distance": 550,
                "estimatedTime": "6h 30m",
            }
        ],
    }


def fallback_maintenance_details(
    hub: str, maintenance_type: str, affected_train_ids: list[str]
) -> dict[str, Any]:
    return {
        "schedule": f"{maintenance_type} at {hub} during the next low-traffic window",
        "resources": ["Track maintenance crew", "Signal technicians"],
        "downtime": "2 hours",
        "protocols": "Block affected sections and restrict speeds near work zones",
        "affectedTrains": list(affected_train_ids),
    }


__all__ = [
    "SEED_TRAINS",
    "SEED_TRAIN_IDS",
    "seed_trains",
    "seed_train_payloads",
    "fallback_analytics",
    "fallback_alerts",
    "fallback_route_options",
    "fallback_maintenance_details",
]
