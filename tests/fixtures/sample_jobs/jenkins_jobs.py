SERVER = "http://jenkins.example.com"
CLI_JAR = "/opt/jenkins/jenkins-cli.jar"


def build(job):
    job.subversion("svn://svn.example.com/app/trunk")
    job.parameter("BRANCH", "trunk", "Branch to build")
    job.sh("make")
    job.sh("make test")
    job.artifacts("dist/**")
    job.parameterised_trigger("deploy", "ENV=staging\nVERSION=$BUILD_NUMBER")


def deploy(job):
    job.parameter("ENV")
    job.parameter("VERSION")
    job.workspace("/var/jenkins/deploy")
    job.sh("./deploy.sh $ENV $VERSION")


def jobs(j):
    j.job("build", build)
    j.job("deploy", deploy)
