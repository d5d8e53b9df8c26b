"""
Enables:  python -m k8s_loader [--namespace <NAMESPACE>]

Handy when the k8s-loader console script is not on PATH.
"""
from k8s_loader.cli import main

if __name__ == "__main__":
    main()
