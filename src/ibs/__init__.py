"""ibs: scaffold, build and deploy iOS apps by driving the Xcode toolchain."""

__version__ = "0.1.0"
