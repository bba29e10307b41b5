#!/usr/bin/env python
# Software License Agreement (BSD License)
#
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
.. module:: devops_clients.credentials
    :platform: Unix, Windows
    :synopsis: Request payloads of the Jenkins credentials plugin

Jenkins takes credentials as a form field named ``json``. Creating one wraps
the credential in ``{"": "0", "credentials": {...}}``; updating one posts the
bare credential.
'''

import json

GLOBAL_SCOPE = 'GLOBAL'

SSH_CREDENTIAL_CLASS = \
    'com.cloudbees.jenkins.plugins.sshcredentials.impl.BasicSSHUserPrivateKey'
SSH_PRIVATE_KEY_SOURCE_CLASS = SSH_CREDENTIAL_CLASS + \
    '$DirectEntryPrivateKeySource'
USERNAME_PASSWORD_CREDENTIAL_CLASS = \
    'com.cloudbees.plugins.credentials.impl.UsernamePasswordCredentialsImpl'
SECRET_TEXT_CREDENTIAL_CLASS = \
    'org.jenkinsci.plugins.plaincredentials.impl.StringCredentialsImpl'
KUBECONFIG_CREDENTIAL_CLASS = \
    'com.microsoft.jenkins.kubernetes.credentials.KubeconfigCredentials'
KUBECONFIG_SOURCE_CLASS = KUBECONFIG_CREDENTIAL_CLASS + \
    '$DirectEntryKubeconfigSource'


def ssh_credential(id, username, passphrase, private_key, description):
    return {
        'scope': GLOBAL_SCOPE,
        'id': id,
        'username': username,
        'passphrase': passphrase,
        'description': description,
        'privateKeySource': {
            'stapler-class': SSH_PRIVATE_KEY_SOURCE_CLASS,
            'privateKey': private_key,
        },
        'stapler-class': SSH_CREDENTIAL_CLASS,
    }


def username_password_credential(id, username, password, description):
    return {
        'scope': GLOBAL_SCOPE,
        'id': id,
        'username': username,
        'password': password,
        'description': description,
        'stapler-class': USERNAME_PASSWORD_CREDENTIAL_CLASS,
        '$class': USERNAME_PASSWORD_CREDENTIAL_CLASS,
    }


def secret_text_credential(id, secret, description):
    return {
        'scope': GLOBAL_SCOPE,
        'id': id,
        'secret': secret,
        'description': description,
        'stapler-class': SECRET_TEXT_CREDENTIAL_CLASS,
        '$class': SECRET_TEXT_CREDENTIAL_CLASS,
    }


def kubeconfig_credential(id, content, description):
    return {
        'scope': GLOBAL_SCOPE,
        'id': id,
        'description': description,
        'kubeconfigSource': {
            'stapler-class': KUBECONFIG_SOURCE_CLASS,
            'content': content,
        },
        'stapler-class': KUBECONFIG_CREDENTIAL_CLASS,
        '$class': KUBECONFIG_CREDENTIAL_CLASS,
    }


def create_request(credential):
    '''Wrap a credential for the ``createCredentials`` endpoint.'''
    return {'': '0', 'credentials': credential}


def form_data(payload):
    '''Form body carrying ``payload`` as the ``json`` field, ``dict``.'''
    return {'json': json.dumps(payload)}
