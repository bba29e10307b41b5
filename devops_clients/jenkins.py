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
.. module:: devops_clients.jenkins
    :platform: Unix, Windows
    :synopsis: Jenkins client for jobs, folders, credentials and roles

All requests to one server pass through a bounded semaphore sized at
construction, so a client shared between threads never has more than
``max_connections`` requests in flight.

Example::

    >>> server = Jenkins('http://localhost:8080', 'admin', 'token',
    ...                  max_connections=5).init()
    >>> server.create_folder('project1', 'first project')
    >>> server.create_job(config_xml, JobOptions('build', ['project1']))
    >>> server.build_job(JobOptions('build', ['project1'],
    ...                             parameters={'BRANCH': 'master'}))
    25
'''

import json
import logging
import os
import threading
from http.client import BadStatusLine
from urllib.parse import urlencode, urljoin, quote
from xml.sax.saxutils import escape

import requests
import requests.exceptions as req_exc

from devops_clients import credentials
from devops_clients import permissions
from devops_clients import transport
from devops_clients.endpoints import (
    ADD_ROLE, ASSIGN_ROLE, BUILD_INFO, BUILD_JOB, BUILD_WITH_PARAMS_JOB,
    COPY_JOB, CREATE_CREDENTIAL, CREATE_JOB, CREATE_SYSTEM_CREDENTIAL,
    CRUMB_URL, DELETE_CREDENTIAL, DELETE_JOB, DELETE_SID, GET_ROLE, INFO,
    JOB_INFO, JOB_NAME, REMOVE_ROLES, RENAME_JOB, SCRIPT_TEXT,
    UPDATE_CREDENTIAL)

DEFAULT_HEADERS = {'Content-Type': 'text/xml; charset=utf-8'}
DEFAULT_MAX_CONNECTIONS = 10
DEFAULT_CREDENTIAL_DOMAIN = '_'
DEFAULT_REPLY_TO = 'no-reply@k8s.kubesphere.io'
FOLDER_CLASS = 'com.cloudbees.hudson.plugins.folder.Folder'

FOLDER_CONFIG_XML = '''<?xml version='1.0' encoding='UTF-8'?>
<com.cloudbees.hudson.plugins.folder.Folder>
  <actions/>
  <description>%(description)s</description>
  <properties/>
  <folderViews/>
  <healthMetrics/>
</com.cloudbees.hudson.plugins.folder.Folder>'''

MAIL_SERVER_SCRIPT = '''import jenkins.model.*

def emailFromName = "%(email)s"
def emailFromAddr = "%(from_email_addr)s"
def emailFromPass = "%(password)s"
def emailSmtpHost = "%(email_host)s"
def emailSmtpPort = "%(port)s"
def ssl = %(ssl_enable)s

def locationConfig = JenkinsLocationConfiguration.get()
locationConfig.adminAddress = "${emailFromName} <${emailFromAddr}>"
locationConfig.save()

def mailer = Jenkins.instance.getDescriptor("hudson.tasks.Mailer")
mailer.setSmtpAuth(emailFromAddr, emailFromPass)
mailer.setReplyToAddress("%(reply_to)s")
mailer.setSmtpHost(emailSmtpHost)
mailer.setUseSsl(ssl)
mailer.setSmtpPort(emailSmtpPort)
mailer.save()'''


class JenkinsException(Exception):
    '''General exception type for jenkins-API-related failures.'''
    pass


class NotFoundException(JenkinsException):
    '''A special exception to call out the case of receiving a 404.'''
    pass


class EmptyResponseException(JenkinsException):
    '''A special exception to call out the case receiving an empty response.'''
    pass


class BadHTTPException(JenkinsException):
    '''A special exception to call out the case of a broken HTTP response.'''
    pass


class TimeoutException(JenkinsException):
    '''A special exception to call out in the case of a socket timeout.'''


class JobOptions(object):
    '''Recognized options for creating and building a job.

    :param name: Job name without folders, required, ``str``
    :param parents: Enclosing folders, outermost first, ``list``
    :param parameters: Build parameters, ``dict``
    '''

    def __init__(self, name, parents=None, parameters=None):
        self.name = name
        self.parents = list(parents or [])
        self.parameters = parameters

    @property
    def full_name(self):
        return '/'.join(self.parents + [self.name])


class EmailServerConfig(object):

    def __init__(self, email, from_email_addr, password, email_host, port,
                 ssl_enable=False, reply_to=DEFAULT_REPLY_TO):
        self.email = email
        self.from_email_addr = from_email_addr
        self.password = password
        self.email_host = email_host
        self.port = port
        self.ssl_enable = ssl_enable
        self.reply_to = reply_to


def _groovy_string(value):
    return str(value).replace('\\', '\\\\').replace(
        '"', '\\"').replace('$', '\\$')


class Jenkins(object):

    def __init__(self, url, username=None, password=None, timeout=None,
                 max_connections=DEFAULT_MAX_CONNECTIONS, logger=None):
        '''Create handle to Jenkins instance.

        All methods will raise :class:`JenkinsException` on failure.

        :param url: URL of Jenkins server, ``str``
        :param username: Server username, ``str``
        :param password: Server password, ``str``
        :param timeout: Server connection timeout in secs (default: not set), ``int``
        :param max_connections: Maximum number of requests in flight, ``int``
        :param logger: ``logging.Logger``, defaults to this module's logger
        '''
        if max_connections < 1:
            raise ValueError("max_connections must be >= 1 not %d"
                             % max_connections)

        if url[-1] == '/':
            self.server = url
        else:
            self.server = url + '/'

        self.logger = logger or logging.getLogger(__name__)
        self.auth = None
        if username is not None and password is not None:
            self.auth = requests.auth.HTTPBasicAuth(
                username.encode('utf-8'), password.encode('utf-8'))

        self.crumb = None
        self.version = None
        self.timeout = timeout
        self.max_connections = max_connections
        self._connections = threading.BoundedSemaphore(max_connections)

        extra_headers = os.environ.get("JENKINS_API_EXTRA_HEADERS", "")
        if extra_headers:
            self.logger.warning("JENKINS_API_EXTRA_HEADERS adds these HTTP headers: %s",
                                extra_headers.split("\n"))
        self._session = transport.create_session(
            transport.parse_extra_headers(extra_headers), self.logger)
        self._session.auth = self.auth

    def _get_encoded_params(self, params):
        for k, v in params.items():
            if k in ["name", "short_name", "from_short_name", "to_short_name",
                     "folder_url", "from_folder_url", "domain_name"]:
                params[k] = quote(v.encode('utf8'))
        return params

    def _build_url(self, format_spec, variables=None):

        if variables:
            url_path = format_spec % self._get_encoded_params(variables)
        else:
            url_path = format_spec

        return str(urljoin(self.server, url_path))

    def maybe_add_crumb(self, req):
        # We don't know yet whether we need a crumb
        if self.crumb is None:
            try:
                response = self.jenkins_open(requests.Request(
                    'GET', self._build_url(CRUMB_URL)), add_crumb=False)
            except (NotFoundException, EmptyResponseException):
                self.crumb = False
            else:
                self.crumb = json.loads(response) if response else False
        if self.crumb:
            req.headers[self.crumb['crumbRequestField']] = self.crumb['crumb']

    def _response_handler(self, response):
        '''Handle response objects'''

        # raise exceptions if occurred
        response.raise_for_status()

        headers = response.headers
        if (headers.get('content-length') is None and
                headers.get('transfer-encoding') is None and
                headers.get('location') is None and
                (response.content is None or len(response.content) <= 0)):
            # response body should only exist if one of these is provided
            raise EmptyResponseException(
                "Error communicating with server[%s]: "
                "empty response" % self.server)

        return response

    def _request(self, req):

        r = self._session.prepare_request(req)
        # requests.Session.send() does not honor env settings by design
        # see https://github.com/requests/requests/issues/2807
        _settings = self._session.merge_environment_settings(
            r.url, {}, None, self._session.verify, None)
        _settings['timeout'] = self.timeout
        with self._connections:
            return self._session.send(r, **_settings)

    def jenkins_open(self, req, add_crumb=True):
        '''Return the HTTP response body from a ``requests.Request``.

        :returns: ``str``
        '''
        return self.jenkins_request(req, add_crumb).text

    def jenkins_request(self, req, add_crumb=True):
        '''Utility routine for opening an HTTP request to a Jenkins server.

        Blocks while ``max_connections`` requests are already in flight.

        :param req: A ``requests.Request`` to submit.
        :param add_crumb: If True, try to add a crumb header to this ``req``
                          before submitting. Defaults to ``True``.
        :returns: A ``requests.Response`` object.
        '''
        try:
            if add_crumb:
                self.maybe_add_crumb(req)

            return self._response_handler(
                self._request(req))

        except req_exc.HTTPError as e:
            # Jenkins's funky authentication means its nigh impossible to
            # distinguish errors.
            if e.response.status_code in [401, 403, 500]:
                msg = 'Error in request. ' + \
                      'Possibly authentication failed [%s]: %s' % (
                          e.response.status_code, e.response.reason)
                if e.response.text:
                    msg += '\n' + e.response.text
                raise JenkinsException(msg)
            elif e.response.status_code == 404:
                raise NotFoundException('Requested item could not be found')
            else:
                raise
        except req_exc.Timeout as e:
            raise TimeoutException('Error in request: %s' % (e))

    def init(self):
        '''Check the connection to Jenkins and record its version.

        :returns: this client, :class:`Jenkins`
        '''
        try:
            response = self.jenkins_request(requests.Request(
                'GET', self._build_url(INFO)), add_crumb=False)
            json.loads(response.text)
        except (req_exc.HTTPError, BadStatusLine):
            raise BadHTTPException("Error communicating with server[%s]"
                                   % self.server)
        except ValueError:
            raise JenkinsException(
                'Connection Failed, Please verify that the host and '
                'credentials are correct.')

        self.version = response.headers.get('X-Jenkins')
        return self

    def poll(self):
        '''Status code of the Jenkins root API, ``int``.'''
        response = self.jenkins_request(requests.Request(
            'GET', self._build_url(INFO)), add_crumb=False)
        return response.status_code

    def _get_job_folder(self, name):
        '''Return the name and folder (see cloudbees plugin).

        This is a method to support cloudbees folder plugin.
        Url request should take into account folder path when the job name specify it
        (ex.: 'folder/job')

        :param name: Job name, ``str``
        :returns: Tuple [ 'folder path for Request', 'Name of job without folder path' ]
        '''

        a_path = name.split('/')
        short_name = a_path[-1]
        folder_url = (('job/' + '/job/'.join(a_path[:-1]) + '/')
                      if len(a_path) > 1 else '')

        return folder_url, short_name

    def get_job_info(self, name, depth=0):
        '''Get job information dictionary.

        :param name: Job name, ``str``
        :param depth: JSON depth, ``int``
        :returns: dictionary of job information
        '''
        folder_url, short_name = self._get_job_folder(name)
        try:
            response = self.jenkins_open(requests.Request(
                'GET', self._build_url(JOB_INFO, locals())
            ))
            if response:
                return json.loads(response)
            else:
                raise JenkinsException('job[%s] does not exist' % name)
        except (req_exc.HTTPError, NotFoundException):
            raise JenkinsException('job[%s] does not exist' % name)
        except ValueError:
            raise JenkinsException(
                "Could not parse JSON info for job[%s]" % name)

    def get_job_name(self, name):
        '''Return the name of a job using the API.

        That is roughly an identity method which can be used to quickly verify
        a job exists or is accessible without causing too much stress on the
        server side.

        :param name: Job name, ``str``
        :returns: Name of job or None
        '''
        folder_url, short_name = self._get_job_folder(name)
        try:
            response = self.jenkins_open(requests.Request(
                'GET', self._build_url(JOB_NAME, locals())
            ))
        except NotFoundException:
            return None
        else:
            actual = json.loads(response)['name']
            if actual != short_name:
                raise JenkinsException(
                    'Jenkins returned an unexpected job name %s '
                    '(expected: %s)' % (actual, name))
            return actual

    def job_exists(self, name):
        '''Check whether a job exists

        :param name: Name of Jenkins job, ``str``
        :returns: ``True`` if Jenkins job exists
        '''
        folder_url, short_name = self._get_job_folder(name)
        return self.get_job_name(name) == short_name

    def assert_job_exists(self, name,
                          exception_message='job[%s] does not exist'):
        '''Raise an exception if a job does not exist

        :param name: Name of Jenkins job, ``str``
        :param exception_message: Message to use for the exception. Formatted
                                  with ``name``
        :throws: :class:`JenkinsException` whenever the job does not exist
        '''
        if not self.job_exists(name):
            raise JenkinsException(exception_message % name)

    def get_job(self, name, *parents):
        '''Get information of a job inside ``parents`` folders.

        :returns: dictionary of job information
        '''
        return self.get_job_info('/'.join(list(parents) + [name]))

    def get_folder(self, name, *parents):
        '''Get information of a folder inside ``parents`` folders.

        :returns: dictionary of folder information
        :throws: :class:`JenkinsException` when the job is not a folder
        '''
        full_name = '/'.join(list(parents) + [name])
        info = self.get_job_info(full_name)
        if info.get('_class') != FOLDER_CLASS:
            raise JenkinsException('job[%s] is not a folder' % full_name)
        return info

    def is_folder(self, name):
        '''Check whether a job is Cloudbees Folder

        :param name: Job name, ``str``
        :returns: ``True`` if job is folder, ``False`` otherwise
        '''
        return FOLDER_CLASS == self.get_job_info(name).get('_class')

    def create_job(self, config_xml, options):
        '''Create a new Jenkins job

        :param config_xml: config file text, ``str``
        :param options: name and enclosing folders of the job, :class:`JobOptions`
        :returns: full name of the job, ``str``
        '''
        if options is None or not options.name:
            raise JenkinsException('Error Creating Job, job name is missing')

        name = options.full_name
        folder_url, short_name = self._get_job_folder(name)
        if self.job_exists(name):
            raise JenkinsException('job[%s] already exists' % (name))

        try:
            self.jenkins_open(requests.Request(
                'POST', self._build_url(CREATE_JOB, locals()),
                data=config_xml.encode('utf-8'),
                headers=dict(DEFAULT_HEADERS)
            ))
        except NotFoundException:
            raise JenkinsException('Cannot create job[%s] because folder '
                                   'for the job does not exist' % (name))
        self.assert_job_exists(name, 'create[%s] failed')
        return name

    def create_job_in_folder(self, config_xml, job_name, *parents):
        '''Create a new job inside ``parents`` folders.

        Example: ``server.create_job_in_folder(xml, 'build', 'team', 'app')``
        creates ``team/app/build``.
        '''
        return self.create_job(config_xml, JobOptions(job_name, parents))

    def create_folder(self, name, description='', parents=None):
        '''Create a new folder, nested in ``parents`` when given.

        :param name: Folder name, ``str``
        :param description: Folder description, ``str``
        :param parents: Enclosing folders, outermost first, ``list``
        :returns: full name of the folder, ``str``
        '''
        config_xml = FOLDER_CONFIG_XML % {'description': escape(description)}
        return self.create_job(config_xml, JobOptions(name, parents))

    def copy_job(self, from_name, to_name):
        '''Copy a Jenkins job.

        Will raise an exception whenever the source and destination folder
        for this jobs won't be the same.

        :param from_name: Name of Jenkins job to copy from, ``str``
        :param to_name: Name of Jenkins job to copy to, ``str``
        :throws: :class:`JenkinsException` whenever the source and destination
            folder are not the same
        '''
        from_folder_url, from_short_name = self._get_job_folder(from_name)
        to_folder_url, to_short_name = self._get_job_folder(to_name)
        if from_folder_url != to_folder_url:
            raise JenkinsException('copy[%s to %s] failed, source and destination '
                                   'folder must be the same' % (from_name, to_name))

        self.jenkins_open(requests.Request(
            'POST', self._build_url(COPY_JOB, locals())
        ))
        self.assert_job_exists(to_name, 'create[%s] failed')

    def rename_job(self, from_name, to_name):
        '''Rename an existing Jenkins job

        :param from_name: Name of Jenkins job to rename, ``str``
        :param to_name: New Jenkins job name, ``str``
        '''
        from_folder_url, from_short_name = self._get_job_folder(from_name)
        to_folder_url, to_short_name = self._get_job_folder(to_name)
        if from_folder_url != to_folder_url:
            raise JenkinsException('rename[%s to %s] failed, source and destination folder '
                                   'must be the same' % (from_name, to_name))
        self.jenkins_open(requests.Request(
            'POST', self._build_url(RENAME_JOB, locals())
        ))
        self.assert_job_exists(to_name, 'rename[%s] failed')

    def delete_job(self, name):
        '''Delete Jenkins job permanently.

        :param name: Name of Jenkins job, ``str``
        '''
        folder_url, short_name = self._get_job_folder(name)
        self.jenkins_open(requests.Request(
            'POST', self._build_url(DELETE_JOB, locals())
        ))
        if self.job_exists(name):
            raise JenkinsException('delete[%s] failed' % (name))

    def build_job_url(self, name, parameters=None):
        '''Get URL to trigger build job.

        :param name: Name of Jenkins job, ``str``
        :param parameters: parameters for job, or None, ``dict``
        :returns: URL for building job
        '''
        folder_url, short_name = self._get_job_folder(name)
        if parameters:
            return (self._build_url(BUILD_WITH_PARAMS_JOB, locals()) +
                    '?' + urlencode(parameters))
        return self._build_url(BUILD_JOB, locals())

    def build_job(self, options):
        '''Trigger build job.

        This method returns a queue item number. Note that this queue number
        is only valid for about five minutes after the job completes.

        :param options: job to build and its parameters, :class:`JobOptions`
        :returns: ``int`` queue item
        '''
        if options is None or not options.name:
            raise JenkinsException('Error Building Job, job name is missing')

        response = self.jenkins_request(requests.Request(
            'POST', self.build_job_url(options.full_name, options.parameters)))

        if 'Location' not in response.headers:
            raise EmptyResponseException(
                "Header 'Location' not found in "
                "response from server[%s]" % self.server)

        location = response.headers['Location']
        # location is a queue item, eg. "http://jenkins/queue/item/25/"
        if location.endswith('/'):
            location = location[:-1]
        parts = location.split('/')
        number = int(parts[-1])
        return number

    def get_build_info(self, name, number, depth=0):
        '''Get build information dictionary.

        :param name: Job name, ``str``
        :param number: Build number, ``int``
        :param depth: JSON depth, ``int``
        :returns: dictionary of build information, ``dict``
        '''
        folder_url, short_name = self._get_job_folder(name)
        try:
            response = self.jenkins_open(requests.Request(
                'GET', self._build_url(BUILD_INFO, locals())
            ))
            if response:
                return json.loads(response)
            else:
                raise JenkinsException('job[%s] number[%d] does not exist'
                                       % (name, number))
        except (req_exc.HTTPError, NotFoundException):
            raise JenkinsException('job[%s] number[%d] does not exist'
                                   % (name, number))
        except ValueError:
            raise JenkinsException(
                'Could not parse JSON info for job[%s] number[%d]'
                % (name, number)
            )

    def run_script(self, script):
        '''Execute a groovy script on the jenkins master.

        :param script: The groovy script, ``string``
        :returns: The output of the script run, without trailing newline.
        '''
        magic_str = ')]}.'
        print_magic_str = 'print("{}")'.format(magic_str)
        data = {'script': "{0}\n{1}".format(script, print_magic_str).encode('utf-8')}

        result = self.jenkins_open(requests.Request(
            'POST', self._build_url(SCRIPT_TEXT), data=data))

        if not result.endswith(magic_str):
            raise JenkinsException(result)

        result = result[:-len(magic_str)]
        if result.endswith('\n'):
            result = result[:-1]
        return result

    def set_mail_server(self, server):
        '''Configure the mail server used by Jenkins notifications.

        :param server: :class:`EmailServerConfig`
        :returns: ``dict`` with ``success``, ``True`` when the script printed
            nothing, and the script output as ``message``
        '''
        script = MAIL_SERVER_SCRIPT % {
            'email': _groovy_string(server.email),
            'from_email_addr': _groovy_string(server.from_email_addr),
            'password': _groovy_string(server.password),
            'email_host': _groovy_string(server.email_host),
            'port': _groovy_string(server.port),
            'ssl_enable': 'true' if server.ssl_enable else 'false',
            'reply_to': _groovy_string(server.reply_to),
        }
        message = self.run_script(script)
        if message:
            self.logger.error('Failed to set mail server: %s', message)
        return {'success': message == '', 'message': message}

    def _post_credential(self, url, payload):
        self.jenkins_open(requests.Request(
            'POST', url, data=credentials.form_data(payload)))

    def _credential_store(self, domain, folders, name=None):
        if not folders:
            raise JenkinsException('folder name should not be nil')
        folder_url, short_name = self._get_job_folder('/'.join(folders))
        variables = {'folder_url': folder_url, 'short_name': short_name,
                     'domain_name': domain or DEFAULT_CREDENTIAL_DOMAIN}
        if name is not None:
            variables['name'] = name
        return variables

    def create_ssh_credential(self, id, username, passphrase, private_key,
                              description):
        '''Create an ssh credential in the system store.

        :returns: credential id, ``str``
        '''
        self._post_credential(
            self._build_url(CREATE_SYSTEM_CREDENTIAL),
            credentials.create_request(credentials.ssh_credential(
                id, username, passphrase, private_key, description)))
        return id

    def create_username_password_credential(self, id, username, password,
                                            description):
        '''Create a username/password credential in the system store.

        :returns: credential id, ``str``
        '''
        self._post_credential(
            self._build_url(CREATE_SYSTEM_CREDENTIAL),
            credentials.create_request(credentials.username_password_credential(
                id, username, password, description)))
        return id

    def create_ssh_credential_in_folder(self, domain, id, username,
                                        passphrase, private_key, description,
                                        *folders):
        '''Create an ssh credential in the store of a folder.

        :param domain: credential domain, ``'_'`` when empty, ``str``
        :param folders: folder path, outermost first
        :returns: credential id, ``str``
        '''
        url = self._build_url(CREATE_CREDENTIAL,
                              self._credential_store(domain, folders))
        self._post_credential(url, credentials.create_request(
            credentials.ssh_credential(id, username, passphrase, private_key,
                                       description)))
        return id

    def create_username_password_credential_in_folder(self, domain, id,
                                                      username, password,
                                                      description, *folders):
        url = self._build_url(CREATE_CREDENTIAL,
                              self._credential_store(domain, folders))
        self._post_credential(url, credentials.create_request(
            credentials.username_password_credential(id, username, password,
                                                     description)))
        return id

    def create_secret_text_credential_in_folder(self, domain, id, secret,
                                                description, *folders):
        url = self._build_url(CREATE_CREDENTIAL,
                              self._credential_store(domain, folders))
        self._post_credential(url, credentials.create_request(
            credentials.secret_text_credential(id, secret, description)))
        return id

    def create_kubeconfig_credential_in_folder(self, domain, id, content,
                                               description, *folders):
        url = self._build_url(CREATE_CREDENTIAL,
                              self._credential_store(domain, folders))
        self._post_credential(url, credentials.create_request(
            credentials.kubeconfig_credential(id, content, description)))
        return id

    def update_ssh_credential_in_folder(self, domain, id, username,
                                        passphrase, private_key, description,
                                        *folders):
        '''Replace an ssh credential in the store of a folder.

        :returns: credential id, ``str``
        '''
        url = self._build_url(UPDATE_CREDENTIAL,
                              self._credential_store(domain, folders, id))
        self._post_credential(url, credentials.ssh_credential(
            id, username, passphrase, private_key, description))
        return id

    def update_username_password_credential_in_folder(self, domain, id,
                                                      username, password,
                                                      description, *folders):
        url = self._build_url(UPDATE_CREDENTIAL,
                              self._credential_store(domain, folders, id))
        self._post_credential(url, credentials.username_password_credential(
            id, username, password, description))
        return id

    def update_secret_text_credential_in_folder(self, domain, id, secret,
                                                description, *folders):
        url = self._build_url(UPDATE_CREDENTIAL,
                              self._credential_store(domain, folders, id))
        self._post_credential(url, credentials.secret_text_credential(
            id, secret, description))
        return id

    def update_kubeconfig_credential_in_folder(self, domain, id, content,
                                               description, *folders):
        url = self._build_url(UPDATE_CREDENTIAL,
                              self._credential_store(domain, folders, id))
        self._post_credential(url, credentials.kubeconfig_credential(
            id, content, description))
        return id

    def delete_credential_in_folder(self, domain, id, *folders):
        '''Delete a credential from the store of a folder.

        :returns: credential id, ``str``
        '''
        url = self._build_url(DELETE_CREDENTIAL,
                              self._credential_store(domain, folders, id))
        self.jenkins_open(requests.Request('POST', url))
        return id

    def _get_role(self, role_name, role_type):
        response = self.jenkins_open(requests.Request(
            'GET', self._build_url(GET_ROLE),
            params={'roleName': role_name, 'type': role_type}))
        try:
            data = json.loads(response)
        except ValueError:
            raise JenkinsException(
                'Could not parse JSON info for role[%s]' % role_name)
        return data or None

    def get_global_role(self, role_name):
        '''Get a global role.

        :param role_name: Role name, ``str``
        :returns: ``dict`` with ``name``, ``permissions`` (flag to ``bool``)
            and ``sids``, or ``None`` when the role does not exist
        '''
        data = self._get_role(role_name, permissions.GLOBAL_ROLE)
        if data is None:
            return None
        return {
            'name': role_name,
            'permissions': permissions.permission_flags(
                permissions.GLOBAL_PERMISSIONS, data.get('permissionIds')),
            'sids': data.get('sids', []),
        }

    def get_project_role(self, role_name):
        '''Get a project role.

        :param role_name: Role name, ``str``
        :returns: ``dict`` with ``name``, ``pattern``, ``permissions`` and
            ``sids``, or ``None`` when the role does not exist
        '''
        data = self._get_role(role_name, permissions.PROJECT_ROLE)
        if data is None:
            return None
        return {
            'name': role_name,
            'pattern': data.get('pattern', ''),
            'permissions': permissions.permission_flags(
                permissions.PROJECT_PERMISSIONS, data.get('permissionIds')),
            'sids': data.get('sids', []),
        }

    def _permission_ids(self, table, granted):
        try:
            return permissions.permission_ids(table, granted)
        except KeyError as e:
            raise JenkinsException('unknown permission[%s]' % e.args[0])

    def add_global_role(self, role_name, granted, overwrite=False):
        '''Create or overwrite a global role.

        :param role_name: Role name, ``str``
        :param granted: permission flags from
            :data:`devops_clients.permissions.GLOBAL_PERMISSIONS`, ``list``
            or ``dict`` of flag to ``bool``
        :param overwrite: replace an existing role, ``bool``
        :returns: the role, see :meth:`get_global_role`
        '''
        ids = self._permission_ids(permissions.GLOBAL_PERMISSIONS, granted)
        self.jenkins_open(requests.Request(
            'POST', self._build_url(ADD_ROLE), params={
                'roleName': role_name,
                'type': permissions.GLOBAL_ROLE,
                'permissionIds': ','.join(ids),
                'overwrite': 'true' if overwrite else 'false',
            }))
        return {
            'name': role_name,
            'permissions': permissions.permission_flags(
                permissions.GLOBAL_PERMISSIONS, ids),
            'sids': [],
        }

    def add_project_role(self, role_name, pattern, granted, overwrite=False):
        '''Create or overwrite a project role.

        :param role_name: Role name, ``str``
        :param pattern: regex of the job names the role applies to, ``str``
        :param granted: permission flags from
            :data:`devops_clients.permissions.PROJECT_PERMISSIONS`
        :param overwrite: replace an existing role, ``bool``
        :returns: the role, see :meth:`get_project_role`
        '''
        ids = self._permission_ids(permissions.PROJECT_PERMISSIONS, granted)
        self.jenkins_open(requests.Request(
            'POST', self._build_url(ADD_ROLE), params={
                'roleName': role_name,
                'type': permissions.PROJECT_ROLE,
                'permissionIds': ','.join(ids),
                'overwrite': 'true' if overwrite else 'false',
                'pattern': pattern,
            }))
        return {
            'name': role_name,
            'pattern': pattern,
            'permissions': permissions.permission_flags(
                permissions.PROJECT_PERMISSIONS, ids),
            'sids': [],
        }

    def assign_global_role(self, role_name, sid):
        '''Grant a global role to a user or group.'''
        self.jenkins_open(requests.Request(
            'POST', self._build_url(ASSIGN_ROLE), params={
                'type': permissions.GLOBAL_ROLE,
                'roleName': role_name,
                'sid': sid,
            }))

    def assign_project_role(self, role_name, sid):
        '''Grant a project role to a user or group.'''
        self.jenkins_open(requests.Request(
            'POST', self._build_url(ASSIGN_ROLE), params={
                'type': permissions.PROJECT_ROLE,
                'roleName': role_name,
                'sid': sid,
            }))

    def delete_project_roles(self, *role_names):
        '''Delete project roles.'''
        self.jenkins_open(requests.Request(
            'POST', self._build_url(REMOVE_ROLES), params={
                'type': permissions.PROJECT_ROLE,
                'roleNames': ','.join(role_names),
            }))

    def delete_user_in_project(self, username):
        '''Remove a user from every project role.'''
        self.jenkins_open(requests.Request(
            'POST', self._build_url(DELETE_SID), params={
                'type': permissions.PROJECT_ROLE,
                'sid': username,
            }))
