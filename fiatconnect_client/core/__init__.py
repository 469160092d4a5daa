SERVICE_NAME = "fiatconnect-client"
