G0 = 9.80665  # standard gravity (m/s^2) for Isp -> mass flow conversion
UNCONSTRAINED_RATIO = 1.0e6  # sentinel ratio for reference axes a control axis does not touch
ATMOSPHERE_DENSITY_THRESHOLD = 0.001  # density above which a wheel may start disabled
RESOURCE_SHORTFALL_TOLERANCE = 0.99  # withdrawals below this fraction count as shortfall
