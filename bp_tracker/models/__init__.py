from .reading import BloodPressureReading
