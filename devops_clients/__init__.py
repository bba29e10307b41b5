#!/usr/bin/env python
# Software License Agreement (BSD License)
#
# Copyright (c) 2010, Willow Garage, Inc.
# Copyright (c) 2026 DevOps Clients Developers
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
#  * Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
#  * Redistributions in binary form must reproduce the above
#    copyright notice, this list of conditions and the following
#    disclaimer in the documentation and/or other materials provided
#    with the distribution.
#  * Neither the name of Willow Garage, Inc. nor the names of its
#    contributors may be used to endorse or promote products derived
#    from this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# 'AS IS' AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
# COPYRIGHT OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN
# ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.
#

'''
.. module:: devops_clients
    :platform: Unix, Windows
    :synopsis: Python clients for the Jenkins and Docker registry servers
               behind a DevOps platform
    :noindex:

Two clients live here:

* :class:`devops_clients.jenkins.Jenkins` manages jobs, folders,
  credentials, roles and the mail server of a Jenkins master.
* :class:`devops_clients.registry.Registry` reads manifests and image
  configuration from a Docker Registry v2 and checks logins against it.
'''

import logging

from devops_clients.jenkins import (  # noqa: F401
    BadHTTPException, EmailServerConfig, EmptyResponseException, Jenkins,
    JenkinsException, JobOptions, NotFoundException, TimeoutException)
from devops_clients.registry import (  # noqa: F401
    AuthChallenge, AuthConfig, BasicAuthRequiredException, Image, Registry,
    RegistryException, RegistryOptions, UnexpectedStatusException,
    create_registry_client, parse_auth_challenge, parse_image)
from devops_clients.registries import (  # noqa: F401
    AuthInfo, ImageBlob, ImageBlobInfo, registry_image_blob, registry_verify)

__version__ = '0.1.0'

# Set default logging handler to avoid "No handler found" warnings.
logging.getLogger(__name__).addHandler(logging.NullHandler())
