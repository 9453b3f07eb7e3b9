from phoneftp.main_client import main

main()
