"""
Minimal MCP server to try the client against.

Run:
  mcp-client-cli examples/weather_server.py
"""

from mcp.server.fastmcp import FastMCP

app = FastMCP("weather")

_FAKE_TEMPERATURES = {"paris": 20, "oslo": -5, "lima": 18}


@app.tool()
def get_weather(city: str) -> dict:
    """Current temperature in Celsius for a city."""
    temp = _FAKE_TEMPERATURES.get(city.strip().lower())
    if temp is None:
        raise ValueError(f"No weather data for {city}")
    return {"city": city, "temp": temp}


@app.tool()
def add(a: float, b: float) -> float:
    """Add two numbers."""
    return a + b


if __name__ == "__main__":
    app.run(transport="stdio")
