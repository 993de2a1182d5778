import requests
from datetime import datetime, timezone

BASE_URL = "http://localhost:3000"


def get_visible_objects(latitude=None, longitude=None, timestamp=None, min_altitude=None, base_url=BASE_URL):
    """
    Ask the portal which catalog objects are above the horizon

    Parameters:
    - latitude, longitude: Observer position in degrees (site default if omitted)
    - timestamp: Optional datetime object (server uses current time if not provided)
    - min_altitude: Altitude threshold in degrees (server default 15)

    Returns:
    - List of objects with 'altitude' and 'visible' fields, or None on error
    """
    params = {}
    if latitude is not None:
        params["lat"] = latitude
    if longitude is not None:
        params["lon"] = longitude
    if timestamp is not None:
        params["time"] = timestamp.isoformat()
    if min_altitude is not None:
        params["minAlt"] = min_altitude

    response = requests.get(f"{base_url}/api/objects/visible", params=params, timeout=10)

    if response.status_code == 200:
        return response.json()
    else:
        print(f"Error: {response.status_code}")
        print(response.text)
        return None


def search_objects(query="", base_url=BASE_URL):
    """Catalog entries whose id, name or type contains the query"""
    response = requests.get(f"{base_url}/api/objects", params={"q": query}, timeout=10)
    response.raise_for_status()
    return response.json()


def point_telescope(object_id, base_url=BASE_URL):
    """
    Slew the simulated telescope to a catalog object

    Returns:
    - The new telescope state, or None if the object is unknown
    """
    response = requests.post(f"{base_url}/api/telescope/target", json={"id": object_id}, timeout=10)

    if response.status_code == 200:
        return response.json()["scope"]
    elif response.status_code == 404:
        print(f"Unknown object: {object_id}")
        return None
    else:
        response.raise_for_status()


def configure_camera(base_url=BASE_URL, **settings):
    """
    Update imaging settings (exposure, filter, binning, gain, tracking, roi)

    Only the keyword arguments given are sent; the rest keep their current value.
    """
    response = requests.post(f"{base_url}/api/telescope/config", json=settings, timeout=10)
    response.raise_for_status()
    return response.json()["scope"]


def get_weather(base_url=BASE_URL):
    """Latest weather station reading, or None if the feed is down"""
    response = requests.get(f"{base_url}/api/weather", timeout=15)
    result = response.json()
    if not result.get("ok"):
        print(f"Weather unavailable: {result.get('error')}")
        return None
    return result["reading"]


# Example usage
if __name__ == "__main__":
    # Example parameters
    latitude = -37.8136  # Melbourne latitude
    longitude = 144.9631  # Melbourne longitude

    # Current time
    current_time = datetime.now(timezone.utc)

    visible = get_visible_objects(latitude, longitude, current_time, min_altitude=15)
    if visible:
        print("Visible objects:")
        for obj in visible:
            print(f"- {obj['name']} ({obj['type']}) altitude {obj['altitude']:.1f}°, mag {obj['magnitude']}")

        # Point at the highest object and start a 60s luminance exposure
        best = max(visible, key=lambda o: o["altitude"])
        scope = point_telescope(best["id"])
        if scope:
            scope = configure_camera(exposure=60, filter="Luminance", tracking=True)
            print(f"Telescope on {scope['target']} ({scope['ra']}, {scope['dec']}), FOV {scope['fov']}")
    else:
        print("Nothing above the horizon right now.")

    reading = get_weather()
    if reading:
        print(f"Weather at {reading['readAt']}: {reading['temperature']} °C, "
              f"{reading['humidity']}% RH, wind {reading['windSpeed']}")
