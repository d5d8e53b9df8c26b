"""
k8s-loader
Pick a Kubernetes service and environment, then port-forward to its pod.
"""
__version__    = "0.0.2"
__repository__ = "https://github.com/oijusti/k8s-service-loader-script"
