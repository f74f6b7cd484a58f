from .kernelspecmanager import RemoteKernelSpecManager
from .resources import rewrite_kernelspec_resources, rewrite_kernelspecs, rewrite_resource_url
