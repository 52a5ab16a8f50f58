class QoSProfile:
    """
    rclpy-style QoSProfile reduced to what an in-process service needs.
    depth bounds the number of requests a service keeps queued.
    """

    def __init__(self, depth: int = 10):
        depth = int(depth)
        if depth <= 0:
            raise ValueError("QoS depth must be > 0")
        self.depth = depth

    def __repr__(self) -> str:
        return f"QoSProfile(depth={self.depth})"


def as_qos_profile(qos_profile) -> QoSProfile:
    if isinstance(qos_profile, QoSProfile):
        return qos_profile
    return QoSProfile(depth=qos_profile)
