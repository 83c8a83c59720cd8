from skycast.models import CurrentConditions, TemperatureUnit


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def toggle_unit(current: CurrentConditions, unit: TemperatureUnit) -> TemperatureUnit:
    """
    Convert the headline temperature in place and return the new unit.

    Only ``current.temperature`` changes; forecast entries keep the provider's
    Celsius values.
    """
    if unit is TemperatureUnit.CELSIUS:
        current.temperature = celsius_to_fahrenheit(current.temperature)
    else:
        current.temperature = fahrenheit_to_celsius(current.temperature)
    return unit.other
